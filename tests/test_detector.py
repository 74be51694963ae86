"""
Command-Line Detector Tests

Runs detector.main() end to end on presets, files and bad input.
"""

import io
import sys
import json
import tempfile
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from detector import main, run_detection, EXIT_SAFE, EXIT_ERROR, EXIT_DEADLOCK
from utils.logger import DetectionLogger
from utils.scenario_loader import get_preset


SCENARIOS_DIR = project_root / "scenarios"


def test_presets_exit_codes():
    """Exit code reflects the detection outcome."""
    print("\n" + "="*60)
    print("TEST 1: Preset Exit Codes")
    print("="*60)

    assert main(['--scenario', 'safe']) == EXIT_SAFE
    assert main(['--scenario', 'dead1']) == EXIT_DEADLOCK
    assert main(['--scenario', 'dead2', '--verbose', '--no-graph', '--no-chart']) == EXIT_DEADLOCK
    assert main(['--scenario', 'random', '--seed', '3']) in (EXIT_SAFE, EXIT_DEADLOCK)
    print("  ✓ Exit codes correct")


def test_file_scenarios():
    assert main(['--file', str(SCENARIOS_DIR / "safe.json")]) == EXIT_SAFE
    assert main(['--file', str(SCENARIOS_DIR / "partial_deadlock.json")]) == EXIT_DEADLOCK


def test_errors_exit_with_error_code():
    """Load failures and bad dimensions are reported, not raised."""
    with tempfile.TemporaryDirectory() as tmp:
        missing = str(Path(tmp) / "missing.json")
        assert main(['--file', missing]) == EXIT_ERROR

        bad_shape = Path(tmp) / "bad_shape.json"
        bad_shape.write_text(json.dumps({
            'n': 2, 'm': 2,
            'alloc': [[0, 0], [0, 0]],
            'req': [[0, 0], [0, 0, 0]],
            'avail': [0, 0],
        }), encoding='utf-8')
        assert main(['--file', str(bad_shape)]) == EXIT_ERROR

        not_utf8 = Path(tmp) / "not_utf8.json"
        not_utf8.write_bytes(b'{"n": 1, "m": 1, "description": "\xff"}')
        assert main(['--file', str(not_utf8)]) == EXIT_ERROR

        assert main(['--file', tmp]) == EXIT_ERROR


def test_seed_requires_random():
    try:
        main(['--scenario', 'safe', '--seed', '1'])
        assert False, "Should have exited with a usage error"
    except SystemExit as e:
        assert e.code == 2


def test_log_file_report():
    """The report is mirrored to the log file."""
    with tempfile.TemporaryDirectory() as tmp:
        log_path = Path(tmp) / "detect.log"
        assert main(['--scenario', 'safe', '--log-file', str(log_path)]) == EXIT_SAFE

        content = log_path.read_text(encoding='utf-8')

    assert content.startswith("Detection Log - ")
    assert "Pass 1: P0 can finish (Request ≤ Work). Releasing its allocation." in content
    assert "Pass 2: P1 can finish" in content
    assert "No Deadlock - Safe sequence: P0 → P2 → P1" in content
    assert "Resource Allocation Graph (textual)" in content
    assert "Relative CPU Load (Alloc + Request)" in content
    assert "[DEBUG]" not in content


def test_run_detection_verbose():
    """Verbose runs include the snapshot tables and blocked processes."""
    with tempfile.TemporaryDirectory() as tmp:
        log_path = Path(tmp) / "verbose.log"
        logger = DetectionLogger(verbose=True, log_file=str(log_path))
        result = run_detection(get_preset('dead1'), logger, show_graph=False, show_chart=False)
        logger.close()

        content = log_path.read_text(encoding='utf-8')

    assert result.deadlocked == {0, 1, 2}
    assert "Allocation Matrix:" in content
    assert "[DEBUG] Pass 1: P0 cannot finish: requests R1[1] but Work has 0" in content
    assert "[WARNING] Deadlock Detected" in content
    assert "Resource Allocation Graph" not in content


def test_unwritable_log_file():
    """A log file that cannot be opened is reported on stderr with the error exit code."""
    stderr = io.StringIO()
    with tempfile.TemporaryDirectory() as tmp:
        log_path = Path(tmp) / "no_such_dir" / "detect.log"
        with redirect_stderr(stderr):
            code = main(['--scenario', 'safe', '--log-file', str(log_path)])

    assert code == EXIT_ERROR
    assert stderr.getvalue().startswith("[ERROR] Cannot open log file")


def test_error_lines_go_to_stderr():
    """Error-level messages are written to stderr, the report to stdout."""
    stdout, stderr = io.StringIO(), io.StringIO()
    with tempfile.TemporaryDirectory() as tmp:
        with redirect_stdout(stdout), redirect_stderr(stderr):
            code = main(['--file', str(Path(tmp) / "missing.json")])

    assert code == EXIT_ERROR
    assert "[ERROR] Failed to load scenario: Scenario file not found" in stderr.getvalue()
    assert "[ERROR]" not in stdout.getvalue()

    stdout, stderr = io.StringIO(), io.StringIO()
    with redirect_stdout(stdout), redirect_stderr(stderr):
        assert main(['--scenario', 'dead1']) == EXIT_DEADLOCK
    assert "[WARNING] Deadlock Detected" in stdout.getvalue()
    assert stderr.getvalue() == ""


def test_grid_text_input():
    """Matrices typed on the command line go through lenient parsing."""
    print("\n" + "="*60)
    print("TEST: Grid Text Input")
    print("="*60)

    assert main(['--alloc', '1 0; 0 1', '--req', '0 0; 1 0', '--avail', '0 0']) == EXIT_SAFE
    assert main(['--alloc', '1 0; 0 1', '--req', '0 1; 1 0', '--avail', '0 0']) == EXIT_DEADLOCK

    # Blank row skipped, "x" and "-3" read as 0, "2.5" as 2, missing cells as 0
    lenient = ['--alloc', '1, x;; 0 1', '--req', '0 -3; 2.5', '--avail', '1', '--resources', '2']
    assert main(lenient) == EXIT_SAFE

    assert main(['--alloc', '1 0', '--avail', '0 0', '--processes', '0']) == EXIT_ERROR
    assert main(['--alloc', '', '--avail', '']) == EXIT_ERROR
    print("  ✓ Grid text parsed and analyzed")


def test_grid_options_require_alloc():
    try:
        main(['--scenario', 'safe', '--req', '1 0'])
        assert False, "Should have exited with a usage error"
    except SystemExit as e:
        assert e.code == 2

"""
Input Parsing Tests

Tests the lenient cell parsing and Snapshot construction at the input boundary.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from models.snapshot import InvalidDimensions
from algorithms.detection import analyze
from utils.parsing import (
    parse_entry, parse_dimension, parse_vector, parse_matrix, parse_grid_text, build_snapshot,
    snapshot_from_text
)


def test_parse_entry():
    """Cells parse their leading integer; anything else is 0."""
    print("\n" + "="*60)
    print("TEST 1: Cell Parsing")
    print("="*60)

    cases = {
        "3": 3,
        " 12 ": 12,
        "2.7": 2,
        "4abc": 4,
        "+5": 5,
        "": 0,
        "   ": 0,
        "abc": 0,
        "-1": 0,
        None: 0,
        7: 7,
        -3: 0,
        1.9: 1,
        float("nan"): 0,
    }
    for raw, expected in cases.items():
        value = parse_entry(raw)
        print(f"  {raw!r:>8} -> {value}")
        assert value == expected, f"parse_entry({raw!r}) = {value}, expected {expected}"

    print("  ✓ Lenient parsing correct")


def test_parse_dimension_keeps_sign():
    """Dimensions are not clamped, so analyze() can reject them."""
    assert parse_dimension("3") == 3
    assert parse_dimension("") == 0
    assert parse_dimension("-2") == -2


def test_parse_vector_and_matrix_shape():
    """Missing cells become 0 and extra cells are ignored."""
    assert parse_vector(["1", "x"], 3) == [1, 0, 0]
    assert parse_vector(["1", "2", "3", "4"], 2) == [1, 2]
    assert parse_vector(None, 2) == [0, 0]

    matrix = parse_matrix([["1", "2", "9"], ["3"]], 3, 2)
    assert matrix == [[1, 2], [3, 0], [0, 0]]


def test_parse_grid_text():
    text = """
    1, 0 2
    0\t1,1

    3 3 3
    """
    assert parse_grid_text(text) == [["1", "0", "2"], ["0", "1", "1"], ["3", "3", "3"]]
    assert parse_grid_text("1 0; 0 1;;") == [["1", "0"], ["0", "1"]]
    assert parse_grid_text("") == []


def test_build_snapshot_normalizes_input():
    """Raw form-like input becomes an analyzable snapshot."""
    print("\n" + "="*60)
    print("TEST 2: Snapshot From Raw Input")
    print("="*60)

    snapshot = build_snapshot(
        "2", "2",
        allocation=[["1", ""], ["abc", "1"]],
        request=[["0", "-3"], ["2.5"]],
        available=["1"],
    )
    print(f"  allocation={snapshot.allocation}")
    print(f"  request={snapshot.request}")
    print(f"  available={snapshot.available}")

    assert snapshot.process_count == 2
    assert snapshot.resource_count == 2
    assert snapshot.allocation == [[1, 0], [0, 1]]
    assert snapshot.request == [[0, 0], [2, 0]]
    assert snapshot.available == [1, 0]

    result = analyze(snapshot)
    assert result.safe_sequence == [0, 1]
    print("  ✓ Normalized snapshot analyzed")


def test_build_snapshot_with_bad_dimensions():
    """A blank process count still yields a snapshot; analyze() rejects it."""
    snapshot = build_snapshot("", "3", [], [], [])
    assert snapshot.process_count == 0
    assert snapshot.allocation == []
    assert snapshot.available == [0, 0, 0]

    try:
        analyze(snapshot)
        assert False, "Should have raised InvalidDimensions"
    except InvalidDimensions:
        pass


def test_snapshot_from_text_infers_counts():
    """Counts default to the number of rows and of available cells."""
    snapshot = snapshot_from_text("0 1 0; 2 0 0; 3 0 3", "0 0 0; 2 1 1; 0 0 0", "0 0 1")

    assert snapshot.process_count == 3
    assert snapshot.resource_count == 3
    assert snapshot.allocation == [[0, 1, 0], [2, 0, 0], [3, 0, 3]]
    assert analyze(snapshot).safe_sequence == [0, 2, 1]


def test_snapshot_from_text_with_explicit_counts():
    """Explicit counts win; rows and cells are padded or cut to fit."""
    snapshot = snapshot_from_text("1 2 3; 4", "", "", process_count="3", resource_count="2")

    assert snapshot.allocation == [[1, 2], [4, 0], [0, 0]]
    assert snapshot.request == [[0, 0], [0, 0], [0, 0]]
    assert snapshot.available == [0, 0]


def test_snapshot_from_text_without_available():
    """With no available cells the widest matrix row sets the resource count."""
    snapshot = snapshot_from_text("1; 0", "0 2; 1", "")

    assert snapshot.resource_count == 2
    assert snapshot.allocation == [[1, 0], [0, 0]]
    assert snapshot.request == [[0, 2], [1, 0]]
    assert analyze(snapshot).deadlocked == {0, 1}

"""
Logger utility for the Deadlock Detection Analyzer.

Provides step-by-step logging of detection runs with verbosity levels.
"""

import sys
from typing import Optional
from datetime import datetime

from models.snapshot import Snapshot
from models.result import AnalysisResult
from analysis.events import TraceEventType


class DetectionLogger:
    """
    Logger for detection runs.

    Format: "Pass X: P<i> can finish (Request ≤ Work). Releasing its allocation."
    """

    def __init__(self, verbose: bool = False, log_file: Optional[str] = None):
        """
        Initialize logger.

        Args:
            verbose: Enable verbose output
            log_file: Optional file path for logging
        """
        self.verbose = verbose
        self.log_file = log_file
        self.file_handle = None

        if self.log_file:
            self.file_handle = open(self.log_file, 'w', encoding='utf-8')
            self._write_header()

    def _write_header(self) -> None:
        """Write log file header."""
        if self.file_handle:
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            self.file_handle.write(f"Detection Log - {timestamp}\n")
            self.file_handle.write("="*60 + "\n\n")

    def log(self, message: str, level: str = "info") -> None:
        """
        Log a message.

        Args:
            message: Message to log
            level: Log level (info, debug, warning, error)
        """
        if level == "debug" and not self.verbose:
            return

        formatted = self._format_message(message, level)

        # Errors go to stderr
        stream = sys.stderr if level == "error" else sys.stdout
        print(formatted, file=stream)

        if self.file_handle:
            self.file_handle.write(formatted + "\n")
            self.file_handle.flush()

    def _format_message(self, message: str, level: str) -> str:
        """Format message with level prefix."""
        if level == "error":
            return f"[ERROR] {message}"
        elif level == "warning":
            return f"[WARNING] {message}"
        elif level == "debug":
            return f"[DEBUG] {message}"
        else:
            return message

    def log_snapshot(self, snapshot: Snapshot) -> None:
        """Log the snapshot tables (verbose only)."""
        self.log(snapshot.display(), "debug")

    def log_trace(self, result: AnalysisResult) -> None:
        """
        Log every trace entry of a run.

        Scan entries are prefixed with their pass number; BLOCKED entries
        are only shown in verbose mode.

        Args:
            result: Analysis result whose trace to log
        """
        for event in result.trace:
            if event.event_type == TraceEventType.BLOCKED:
                self.log(f"Pass {event.pass_number}: {event}", "debug")
            elif event.event_type in (TraceEventType.CAN_FINISH, TraceEventType.WORK_UPDATE):
                self.log(f"Pass {event.pass_number}: {event}")
            else:
                self.log(str(event))

    def log_result(self, result: AnalysisResult, summary: str) -> None:
        """
        Log the outcome of a run.

        Args:
            result: Analysis result
            summary: Formatted status line
        """
        level = "info" if result.is_safe else "warning"
        self.log(summary, level)
        self.log(f"Final Work = {result.work}", "debug")

    def close(self) -> None:
        """Close log file if open."""
        if self.file_handle:
            self.file_handle.close()
            self.file_handle = None

    def __del__(self):
        """Cleanup on destruction."""
        self.close()

"""
Analysis result model for the Deadlock Detection Analyzer.
"""

from dataclasses import dataclass, field
from typing import List, Set

from analysis.events import TraceEvent


@dataclass
class AnalysisResult:
    """
    Outcome of one Work/Finish safety check.

    Attributes:
        work: [m] Final simulated resource pool
        finished: [n] Completion status of each process
        safe_sequence: Process indices in the order they were marked finished
        deadlocked: Process indices that can never finish (empty iff safe)
        trace: Ordered steps of the run, for display only
    """
    work: List[int]
    finished: List[bool]
    safe_sequence: List[int] = field(default_factory=list)
    deadlocked: Set[int] = field(default_factory=set)
    trace: List[TraceEvent] = field(default_factory=list)

    @property
    def is_safe(self) -> bool:
        """True when every process can finish."""
        return not self.deadlocked

    @property
    def deadlock_exists(self) -> bool:
        return bool(self.deadlocked)

    def trace_lines(self) -> List[str]:
        """Render the trace as human-readable lines."""
        return [str(event) for event in self.trace]

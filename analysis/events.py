"""
Trace Event Model for the Deadlock Detection Analyzer.

Defines the entries recorded while the Work/Finish check runs.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class TraceEventType(Enum):
    """Types of steps recorded in a detection trace."""
    START = "start"
    AVAILABLE = "available"
    CAN_FINISH = "can_finish"
    WORK_UPDATE = "work_update"
    BLOCKED = "blocked"
    SAFE = "safe"
    DEADLOCK = "deadlock"


@dataclass(frozen=True)
class TraceEvent:
    """
    Represents a single step of a detection run.

    Attributes:
        pass_number: Scan pass in which the step happened (0 before scanning)
        event_type: Type of step
        process_id: Process index involved (if applicable)
        work: Work vector after the step (if applicable)
        resource_type: Resource type involved (BLOCKED only)
        requested: Units requested of resource_type (BLOCKED only)
        processes: Process indices involved (SAFE/DEADLOCK only)
    """
    pass_number: int
    event_type: TraceEventType
    process_id: Optional[int] = None
    work: List[int] = field(default_factory=list)
    resource_type: Optional[int] = None
    requested: Optional[int] = None
    processes: List[int] = field(default_factory=list)

    def __str__(self) -> str:
        """Format event as a log line."""
        if self.event_type == TraceEventType.START:
            return "Starting deadlock detection..."
        elif self.event_type == TraceEventType.AVAILABLE:
            return f"Available = {_vector(self.work)}"
        elif self.event_type == TraceEventType.CAN_FINISH:
            return (
                f"P{self.process_id} can finish (Request ≤ Work). "
                f"Releasing its allocation."
            )
        elif self.event_type == TraceEventType.WORK_UPDATE:
            return f"Work becomes {_vector(self.work)}"
        elif self.event_type == TraceEventType.BLOCKED:
            have = self.work[self.resource_type]
            return (
                f"P{self.process_id} cannot finish: requests "
                f"R{self.resource_type}[{self.requested}] but Work has {have}"
            )
        elif self.event_type == TraceEventType.SAFE:
            chain = " → ".join(f"P{i}" for i in self.processes)
            return f"No deadlock. Safe sequence: {chain}"
        elif self.event_type == TraceEventType.DEADLOCK:
            pids = ", ".join(f"P{i}" for i in self.processes)
            return f"DEADLOCK DETECTED - Processes in deadlock: [{pids}]"
        else:
            return f"{self.event_type.value}"


def _vector(values: List[int]) -> str:
    return "[" + ", ".join(str(v) for v in values) + "]"

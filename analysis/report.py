"""
Report Rendering for the Deadlock Detection Analyzer.

Derives the display data shown next to a detection run: status summary,
per-process load, and a textual resource allocation graph (RAG). Nothing
here is fed back into the analysis.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from models.snapshot import Snapshot, validate_snapshot
from models.result import AnalysisResult


# Bar chart fill characters
SAFE_BAR = "█"
DEADLOCKED_BAR = "░"
CHART_WIDTH = 40


@dataclass
class ProcessEdges:
    """
    RAG edges for one process.

    Attributes:
        process_id: Process index
        allocated: (resource, amount) pairs for edges R → P
        requested: (resource, amount) pairs for edges P → R
    """
    process_id: int
    allocated: List[Tuple[int, int]] = field(default_factory=list)
    requested: List[Tuple[int, int]] = field(default_factory=list)

    def allocated_labels(self) -> List[str]:
        return [f"R{j} → P{self.process_id} (x{k})" for j, k in self.allocated]

    def requested_labels(self) -> List[str]:
        return [f"P{self.process_id} → R{j} (x{k})" for j, k in self.requested]


def process_labels(num_processes: int) -> List[str]:
    """Labels P0..Pn-1."""
    return [f"P{i}" for i in range(num_processes)]


def format_safe_sequence(result: AnalysisResult) -> str:
    """Render the safe sequence as an arrow chain, e.g. 'P0 → P2 → P1'."""
    return " → ".join(f"P{i}" for i in result.safe_sequence)


def format_summary(result: AnalysisResult) -> str:
    """
    Build the one-line status for a detection run.

    Args:
        result: Analysis result

    Returns:
        Safe status with the safe sequence, or deadlock status with the
        deadlocked processes
    """
    if result.is_safe:
        return f"No Deadlock - Safe sequence: {format_safe_sequence(result)}"

    pids = ", ".join(f"P{i}" for i in sorted(result.deadlocked))
    return f"Deadlock Detected - Some processes can never complete. Deadlocked: {pids}"


def process_loads(snapshot: Snapshot) -> List[int]:
    """
    Relative load of each process: sum over resources of allocation + request.

    Args:
        snapshot: Snapshot to measure

    Returns:
        List of load values indexed by process
    """
    validate_snapshot(snapshot)
    totals = (snapshot.allocation_matrix + snapshot.request_matrix).sum(axis=1)
    return [int(t) for t in totals]


def build_rag_view(snapshot: Snapshot) -> List[ProcessEdges]:
    """
    Derive resource allocation graph edges from the matrices.

    Args:
        snapshot: Snapshot to describe

    Returns:
        One ProcessEdges entry per process
    """
    validate_snapshot(snapshot)
    allocation = snapshot.allocation_matrix
    request = snapshot.request_matrix

    view = []
    for i in range(snapshot.process_count):
        edges = ProcessEdges(process_id=i)
        for j in range(snapshot.resource_count):
            if allocation[i][j] > 0:
                edges.allocated.append((j, int(allocation[i][j])))
            if request[i][j] > 0:
                edges.requested.append((j, int(request[i][j])))
        view.append(edges)
    return view


def format_rag_view(snapshot: Snapshot) -> str:
    """Render the textual resource allocation graph."""
    output = ["Resource Allocation Graph (textual)", "P → R = request, R → P = allocation."]
    for edges in build_rag_view(snapshot):
        output.append(f"P{edges.process_id}")
        if edges.allocated:
            output.append("  Allocated: " + ", ".join(edges.allocated_labels()))
        if edges.requested:
            output.append("  Requests: " + ", ".join(edges.requested_labels()))
    return "\n".join(output)


def format_load_chart(snapshot: Snapshot, result: AnalysisResult, width: int = CHART_WIDTH) -> str:
    """
    Render per-process load as a horizontal bar chart.

    Deadlocked processes are drawn with a different fill and flagged.

    Args:
        snapshot: Snapshot the result was computed from
        result: Analysis result for the snapshot
        width: Width of the longest bar in characters

    Returns:
        Multi-line chart string
    """
    loads = process_loads(snapshot)
    peak = max(loads) if max(loads) > 0 else 1

    output = ["Relative CPU Load (Alloc + Request)"]
    for i, (label, load) in enumerate(zip(process_labels(len(loads)), loads)):
        deadlocked = i in result.deadlocked
        fill = DEADLOCKED_BAR if deadlocked else SAFE_BAR
        bar = fill * round(load * width / peak)
        marker = "  [DEADLOCKED]" if deadlocked else ""
        output.append(f"  {label:>4} | {bar} {load}{marker}")
    return "\n".join(output)

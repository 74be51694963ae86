"""
Deadlock Detection Algorithm for the Deadlock Detection Analyzer.

Implements matrix-based deadlock detection (Work/Finish algorithm) for
multi-instance resource systems.
"""

import numpy as np

from models.snapshot import Snapshot, validate_snapshot
from models.result import AnalysisResult
from analysis.events import TraceEvent, TraceEventType


def analyze(snapshot: Snapshot) -> AnalysisResult:
    """
    Detect deadlock using the matrix-based Work/Finish algorithm.

    Algorithm (Multi-Instance Resources):
    1. Initialize Work = Available.copy(), Finish = [False] * n
    2. Scan processes in index order; for each i with Finish[i] == False and
       Request[i] <= Work (element-wise): Work += Allocation[i], Finish[i] = True
    3. Repeat the scan until a full pass finishes no process
    4. Processes with Finish[i] == False are deadlocked

    Uses Request[i] (outstanding need), NOT Max[i] - Allocation[i].

    A later pass is needed because a process skipped early in a pass can
    become finishable once a higher-indexed process releases its allocation.
    Scan order only picks among valid safe sequences; the deadlocked set does
    not depend on it.

    Time Complexity: O(n²×m) where n = processes, m = resource types

    Args:
        snapshot: Allocation/request/available snapshot (not modified)

    Returns:
        AnalysisResult with final work, finish flags, safe sequence,
        deadlocked set and trace

    Raises:
        InvalidDimensions: If snapshot dimensions are inconsistent

    References:
        Silberschatz, A., Galvin, P. B., & Gagne, G. (2018).
        Operating System Concepts (10th ed.). Chapter 7: Deadlocks.
    """
    validate_snapshot(snapshot)

    num_processes = snapshot.process_count
    allocation = snapshot.allocation_matrix
    request = snapshot.request_matrix

    # Step 1: Initialize Work and Finish vectors
    work = snapshot.available_vector
    finish = np.array([False] * num_processes)
    safe_sequence = []
    trace = [
        TraceEvent(0, TraceEventType.START),
        TraceEvent(0, TraceEventType.AVAILABLE, work=work.tolist()),
    ]

    # Step 2-3: Scan until a pass makes no progress
    pass_number = 0
    found_progress = True
    while found_progress:
        found_progress = False
        pass_number += 1

        for i in range(num_processes):
            if finish[i]:
                continue

            if np.all(request[i] <= work):
                trace.append(TraceEvent(pass_number, TraceEventType.CAN_FINISH, process_id=i))
                work += allocation[i]
                finish[i] = True
                safe_sequence.append(i)
                found_progress = True
                trace.append(TraceEvent(
                    pass_number, TraceEventType.WORK_UPDATE, process_id=i, work=work.tolist()
                ))

    # Step 4: Identify deadlocked processes
    deadlocked = [i for i in range(num_processes) if not finish[i]]

    for i in deadlocked:
        # Some resource must exceed Work, otherwise the last pass would have finished i
        j = int(np.argmax((request[i] > work).astype(bool)))
        trace.append(TraceEvent(
            pass_number, TraceEventType.BLOCKED, process_id=i, work=work.tolist(),
            resource_type=j, requested=int(request[i][j])
        ))

    if deadlocked:
        trace.append(TraceEvent(pass_number, TraceEventType.DEADLOCK, processes=deadlocked))
    else:
        trace.append(TraceEvent(pass_number, TraceEventType.SAFE, processes=list(safe_sequence)))

    return AnalysisResult(
        work=work.tolist(),
        finished=[bool(f) for f in finish],
        safe_sequence=safe_sequence,
        deadlocked=set(deadlocked),
        trace=trace,
    )


def is_safe_state(snapshot: Snapshot) -> bool:
    """
    Check whether every process in the snapshot can finish.

    Args:
        snapshot: Snapshot to check

    Returns:
        True if the deadlocked set is empty
    """
    return analyze(snapshot).is_safe

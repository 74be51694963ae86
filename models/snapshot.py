"""
Snapshot model for the Deadlock Detection Analyzer.

Holds the matrices and vectors consumed by the Work/Finish safety check.
"""

import numpy as np
from typing import List, Sequence
from dataclasses import dataclass, field


class InvalidDimensions(ValueError):
    """Exception raised when snapshot dimensions are inconsistent."""
    pass


@dataclass(frozen=True)
class Snapshot:
    """
    Resource allocation snapshot for one detection run.

    Attributes:
        process_count: Number of processes (n)
        resource_count: Number of resource types (m)
        allocation: [n][m] Units of each resource held by each process
        request: [n][m] Units each process still needs to complete
        available: [m] Free resource units by type
        name: Optional scenario name
        description: Optional scenario description

    Note:
        `request` is the outstanding need, not the cumulative maximum demand.
        `available` is taken as ground truth; it is not checked against
        allocation sums.
    """
    process_count: int
    resource_count: int
    allocation: List[List[int]]
    request: List[List[int]]
    available: List[int]
    name: str = ""
    description: str = field(default="", compare=False)

    @property
    def allocation_matrix(self) -> np.ndarray:
        """Get allocation matrix [n][m] as a fresh array, negatives clamped to 0."""
        return _as_array(self.allocation, (self.process_count, self.resource_count))

    @property
    def request_matrix(self) -> np.ndarray:
        """Get request matrix [n][m] as a fresh array, negatives clamped to 0."""
        return _as_array(self.request, (self.process_count, self.resource_count))

    @property
    def available_vector(self) -> np.ndarray:
        """Get available vector [m] as a fresh array, negatives clamped to 0."""
        return _as_array(self.available, (self.resource_count,))

    def display(self) -> str:
        """
        Generate readable string representation of the snapshot.

        Returns:
            Formatted string showing all matrices and vectors
        """
        validate_snapshot(self)

        header = "     " + " ".join([f"R{j:2}" for j in range(self.resource_count)])
        output = []
        output.append("\n" + "="*60)
        output.append(f"SNAPSHOT {self.name}".rstrip())
        output.append("="*60)
        if self.description:
            output.append(self.description)

        output.append(f"\nProcesses: {self.process_count}, Resource types: {self.resource_count}")

        available = self.available_vector
        output.append("\nAvailable Resources:")
        output.append("  [" + ", ".join(
            f"R{j}:{available[j]:2}" for j in range(self.resource_count)
        ) + "]")

        for title, matrix in (("Allocation Matrix:", self.allocation_matrix),
                              ("Request Matrix (Outstanding):", self.request_matrix)):
            output.append("\n" + title)
            output.append(header)
            for i in range(self.process_count):
                row = f"  P{i}: "
                row += " ".join([f"{matrix[i][j]:3}" for j in range(self.resource_count)])
                output.append(row)

        output.append("\n" + "="*60)
        return "\n".join(output)


def validate_snapshot(snapshot: Snapshot) -> None:
    """
    Check that the snapshot dimensions are consistent.

    Args:
        snapshot: Snapshot to validate

    Raises:
        InvalidDimensions: If counts are not positive or any matrix/vector
            shape does not match (process_count, resource_count)
    """
    n = snapshot.process_count
    m = snapshot.resource_count

    if n <= 0:
        raise InvalidDimensions(f"process_count must be positive, got {n}")
    if m <= 0:
        raise InvalidDimensions(f"resource_count must be positive, got {m}")

    for label, matrix in (("allocation", snapshot.allocation), ("request", snapshot.request)):
        if len(matrix) != n:
            raise InvalidDimensions(
                f"{label} matrix has {len(matrix)} rows, expected {n} (one per process)"
            )
        for i, row in enumerate(matrix):
            if len(row) != m:
                raise InvalidDimensions(
                    f"{label}[P{i}] has {len(row)} entries, expected {m} (one per resource type)"
                )

    if len(snapshot.available) != m:
        raise InvalidDimensions(
            f"available vector has {len(snapshot.available)} entries, expected {m}"
        )


_to_int = np.frompyfunc(int, 1, 1)


def _as_array(values: Sequence, shape: tuple) -> np.ndarray:
    """
    Copy values into an object array of Python ints, clamping negatives to 0.

    Cells stay arbitrary-precision Python ints, so sums never wrap.
    """
    array = _to_int(np.array(values, dtype=object).reshape(shape))
    return np.maximum(array, 0)

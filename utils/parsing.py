"""
Input Parsing for the Deadlock Detection Analyzer.

Turns free-text numeric entry into a Snapshot. Parsing is lenient: blank or
unparseable cells become 0 and negative cells are clamped to 0, so editing
mistakes never surface as errors here. Dimension problems are left for
analyze() to reject.
"""

import math
import re
from typing import Any, List, Optional, Sequence

from models.snapshot import Snapshot


_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_ROW_SEPARATOR = re.compile(r"[;\r\n]+")
_CELL_SEPARATOR = re.compile(r"[,\s]+")


def parse_int(text: Any) -> int:
    """
    Parse the leading integer of a cell, without clamping.

    Args:
        text: Raw cell value (str, number, or None)

    Returns:
        Parsed integer, or 0 if the value is empty or unparseable
    """
    if text is None:
        return 0
    if isinstance(text, bool):
        return int(text)
    if isinstance(text, int):
        return text
    if isinstance(text, float):
        return int(text) if math.isfinite(text) else 0

    match = _LEADING_INT.match(str(text))
    if not match:
        return 0
    return int(match.group(1))


def parse_entry(text: Any) -> int:
    """
    Parse a matrix or vector cell.

    Examples: "3" -> 3, " 2.7" -> 2, "4abc" -> 4, "" -> 0, "x" -> 0, "-1" -> 0

    Args:
        text: Raw cell value

    Returns:
        Non-negative integer
    """
    return max(parse_int(text), 0)


def parse_dimension(text: Any) -> int:
    """
    Parse a process or resource count.

    Non-positive results are returned as-is; analyze() rejects them.
    """
    return parse_int(text)


def parse_vector(values: Optional[Sequence[Any]], length: int) -> List[int]:
    """
    Read exactly `length` cells; missing cells are 0, extra cells are ignored.
    """
    values = list(values or [])
    return [parse_entry(values[j]) if j < len(values) else 0 for j in range(length)]


def parse_matrix(rows: Optional[Sequence[Sequence[Any]]], num_rows: int, num_cols: int) -> List[List[int]]:
    """
    Read exactly num_rows x num_cols cells; missing cells are 0, extra cells are ignored.
    """
    rows = list(rows or [])
    return [
        parse_vector(rows[i] if i < len(rows) else None, num_cols)
        for i in range(num_rows)
    ]


def parse_grid_text(text: str) -> List[List[str]]:
    """
    Split multi-line text into rows of cells.

    Rows are separated by newlines or semicolons; cells by commas and/or
    whitespace. Blank rows are skipped.
    """
    grid = []
    for line in _ROW_SEPARATOR.split(text or ""):
        line = line.strip()
        if not line:
            continue
        grid.append([cell for cell in _CELL_SEPARATOR.split(line) if cell])
    return grid


def build_snapshot(
    process_count: Any,
    resource_count: Any,
    allocation: Optional[Sequence[Sequence[Any]]],
    request: Optional[Sequence[Sequence[Any]]],
    available: Optional[Sequence[Any]],
    name: str = "",
    description: str = ""
) -> Snapshot:
    """
    Normalize raw input into a Snapshot.

    Matrices and the vector are always shaped to the parsed dimensions, so
    the only input analyze() can still reject is a non-positive count.

    Args:
        process_count: Raw process count
        resource_count: Raw resource type count
        allocation: Raw allocation rows
        request: Raw request rows
        available: Raw available cells
        name: Optional scenario name
        description: Optional scenario description

    Returns:
        Snapshot with non-negative integer entries
    """
    n = parse_dimension(process_count)
    m = parse_dimension(resource_count)
    rows = max(n, 0)
    cols = max(m, 0)

    return Snapshot(
        process_count=n,
        resource_count=m,
        allocation=parse_matrix(allocation, rows, cols),
        request=parse_matrix(request, rows, cols),
        available=parse_vector(available, cols),
        name=name,
        description=description,
    )


def snapshot_from_text(
    allocation_text: str,
    request_text: str,
    available_text: str,
    process_count: Any = None,
    resource_count: Any = None
) -> Snapshot:
    """
    Build a Snapshot from grid text such as "1 0; 0 1".

    When a count is not given it is taken from the text: processes from the
    number of allocation (or request) rows, resource types from the number
    of available cells (or the widest matrix row).

    Args:
        allocation_text: Allocation rows
        request_text: Request rows
        available_text: Available cells (a single row)
        process_count: Optional raw process count
        resource_count: Optional raw resource type count

    Returns:
        Snapshot normalized by build_snapshot()
    """
    allocation = parse_grid_text(allocation_text)
    request = parse_grid_text(request_text)
    available = [cell for row in parse_grid_text(available_text) for cell in row]

    if process_count is None:
        process_count = max(len(allocation), len(request))
    if resource_count is None:
        widths = [len(row) for row in allocation + request]
        resource_count = len(available) if available else max(widths, default=0)

    return build_snapshot(process_count, resource_count, allocation, request, available)

"""
Scenario Loader for the Deadlock Detection Analyzer.

Provides the preset example snapshots, a random snapshot generator, and
loading of JSON scenario files.
"""

import json
from typing import Dict, Any, List, Optional

import numpy as np

from models.snapshot import Snapshot
from utils.parsing import parse_dimension, parse_entry


# Random scenario bounds (inclusive)
RANDOM_PROCESS_RANGE = (3, 5)
RANDOM_RESOURCE_RANGE = (2, 4)
RANDOM_VALUE_MAX = 2

REQUIRED_FIELDS = ['n', 'm', 'alloc', 'req', 'avail']


class ScenarioLoadError(Exception):
    """Exception raised when a scenario cannot be loaded or is invalid."""
    pass


PRESET_SCENARIOS: Dict[str, Dict[str, Any]] = {
    'safe': {
        'description': "Known-safe 3x3 case",
        'n': 3, 'm': 3,
        'alloc': [
            [0, 1, 0],
            [2, 0, 0],
            [3, 0, 3],
        ],
        'req': [
            [0, 0, 0],
            [2, 1, 1],
            [0, 0, 0],
        ],
        'avail': [0, 0, 1],
    },
    'dead1': {
        'description': "Known deadlock: three processes mutually blocked",
        'n': 3, 'm': 3,
        'alloc': [
            [1, 0, 1],
            [0, 1, 0],
            [1, 0, 0],
        ],
        'req': [
            [0, 1, 0],
            [1, 0, 1],
            [0, 1, 0],
        ],
        'avail': [0, 0, 0],
    },
    'dead2': {
        'description': "Known deadlock: cyclic wait over two resource types",
        'n': 4, 'm': 2,
        'alloc': [
            [1, 0],
            [0, 1],
            [1, 0],
            [0, 1],
        ],
        'req': [
            [0, 1],
            [1, 0],
            [0, 1],
            [1, 0],
        ],
        'avail': [0, 0],
    },
}


def preset_names() -> List[str]:
    """Names of the built-in scenarios."""
    return list(PRESET_SCENARIOS)


def get_preset(name: str) -> Snapshot:
    """
    Build a snapshot from a built-in scenario.

    Args:
        name: Preset name ('safe', 'dead1', 'dead2')

    Returns:
        Snapshot for the preset

    Raises:
        ScenarioLoadError: If the preset does not exist
    """
    if name not in PRESET_SCENARIOS:
        raise ScenarioLoadError(
            f"Unknown scenario '{name}' (choose from: {', '.join(preset_names())})"
        )
    return _snapshot_from_data(PRESET_SCENARIOS[name], name)


def random_scenario(seed: Optional[int] = None) -> Snapshot:
    """
    Generate a random snapshot.

    Dimensions are drawn from RANDOM_PROCESS_RANGE and RANDOM_RESOURCE_RANGE;
    every matrix and vector entry is drawn from [0, RANDOM_VALUE_MAX].

    Args:
        seed: Optional seed for a reproducible snapshot

    Returns:
        Random Snapshot
    """
    rng = np.random.default_rng(seed)
    n = int(rng.integers(RANDOM_PROCESS_RANGE[0], RANDOM_PROCESS_RANGE[1], endpoint=True))
    m = int(rng.integers(RANDOM_RESOURCE_RANGE[0], RANDOM_RESOURCE_RANGE[1], endpoint=True))

    available = rng.integers(0, RANDOM_VALUE_MAX, size=m, endpoint=True)
    allocation = rng.integers(0, RANDOM_VALUE_MAX, size=(n, m), endpoint=True)
    request = rng.integers(0, RANDOM_VALUE_MAX, size=(n, m), endpoint=True)

    description = "Random scenario" if seed is None else f"Random scenario (seed={seed})"
    return Snapshot(
        process_count=n,
        resource_count=m,
        allocation=allocation.tolist(),
        request=request.tolist(),
        available=available.tolist(),
        name='random',
        description=description,
    )


def load_scenario(file_path: str) -> Snapshot:
    """
    Load scenario from JSON file.

    Expected keys: n, m, alloc, req, avail (optional: name, description).
    Cells are parsed leniently; dimension mismatches are reported by analyze().

    Args:
        file_path: Path to scenario JSON file

    Returns:
        Snapshot built from the file

    Raises:
        ScenarioLoadError: If file cannot be loaded or is missing fields
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ScenarioLoadError(f"Scenario file not found: {file_path}")
    except OSError as e:
        raise ScenarioLoadError(f"Cannot read scenario file {file_path}: {e}")
    except UnicodeDecodeError as e:
        raise ScenarioLoadError(f"Scenario file is not valid UTF-8: {e}")
    except json.JSONDecodeError as e:
        raise ScenarioLoadError(f"Invalid JSON in scenario file: {e}")

    if not isinstance(data, dict):
        raise ScenarioLoadError("Scenario file must contain a JSON object")

    for field in REQUIRED_FIELDS:
        if field not in data:
            raise ScenarioLoadError(f"Scenario missing '{field}' field")

    return _snapshot_from_data(data, data.get('name', ''))


def _snapshot_from_data(data: Dict[str, Any], name: str) -> Snapshot:
    """
    Build a snapshot from scenario data.

    Rows are kept exactly as given so analyze() can reject shape errors;
    only the cell values are normalized.
    """
    for field in ('alloc', 'req'):
        if not isinstance(data[field], list) or not all(isinstance(row, list) for row in data[field]):
            raise ScenarioLoadError(f"Scenario field '{field}' must be a list of rows")
    if not isinstance(data['avail'], list):
        raise ScenarioLoadError("Scenario field 'avail' must be a list")

    return Snapshot(
        process_count=parse_dimension(data['n']),
        resource_count=parse_dimension(data['m']),
        allocation=[[parse_entry(v) for v in row] for row in data['alloc']],
        request=[[parse_entry(v) for v in row] for row in data['req']],
        available=[parse_entry(v) for v in data['avail']],
        name=name,
        description=data.get('description', ''),
    )


def get_scenario_description(file_path: str) -> str:
    """
    Get description from scenario file without full loading.

    Args:
        file_path: Path to scenario JSON file

    Returns:
        Description string, or empty string if not present
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return ''
    if not isinstance(data, dict):
        return ''
    return data.get('description', '')

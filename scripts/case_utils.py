"""Shared utilities for running conversation cases."""

import json
from glob import glob
from pathlib import Path
from typing import Any, Dict, List, Tuple

REQUIRED_KEYS = ("topic", "standpoint", "strategy", "turns")


def load_case(path: Path) -> Dict[str, Any]:
    """Load a single conversation case and check its required keys."""
    with path.open("r", encoding="utf-8") as f:
        case = json.load(f)

    missing = [k for k in REQUIRED_KEYS if k not in case]
    if missing:
        raise ValueError(f"{path}: missing keys {missing}")
    if not isinstance(case["turns"], list) or not case["turns"]:
        raise ValueError(f"{path}: 'turns' must be a non-empty list")
    for i, turn in enumerate(case["turns"]):
        if not isinstance(turn, dict) or not turn.get("user"):
            raise ValueError(f"{path}: turn {i} needs a non-empty 'user' message")
    return case


def resolve_cases(case_pattern: str) -> List[Tuple[Path, Dict[str, Any]]]:
    """
    Resolve a case path or glob to (path, case_data) tuples, sorted by path.

    Supports:
    - Single file: scripts/cases/phones_suggestion.json
    - Glob pattern: scripts/cases/*.json
    """
    if not any(c in case_pattern for c in ["*", "?", "[", "]"]):
        path = Path(case_pattern)
        if not path.is_file():
            raise FileNotFoundError(f"Case file not found: {case_pattern}")
        return [(path, load_case(path))]

    results = []
    for match_str in sorted(glob(case_pattern, recursive=True)):
        path = Path(match_str)
        if not (path.is_file() and path.suffix == ".json"):
            continue
        try:
            results.append((path, load_case(path)))
        except (json.JSONDecodeError, ValueError, OSError) as e:
            print(f"Warning: Skipping {path}: {e}")

    if not results:
        raise FileNotFoundError(f"No valid conversation cases found matching: {case_pattern}")
    return results


def get_case_id(case_path: Path, case_data: Dict[str, Any]) -> str:
    """Case id from the case data, else the filename stem."""
    return case_data.get("case_id", case_path.stem)

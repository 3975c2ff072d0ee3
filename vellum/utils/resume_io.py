"""Loading resume records from JSON files."""

import json
from pathlib import Path
from typing import Any, Dict, Union


def load_resume(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a resume record from a JSON file.

    Args:
        path: Path to a JSON Resume document

    Returns:
        Parsed resume record

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file isn't valid JSON or its top level isn't an object
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object at the top level of {path}")
    return data

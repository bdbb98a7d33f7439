"""
Loading of candidate actions from the local snapshot file.
"""

import json
from pathlib import Path
from typing import Any

from .exceptions import CandidateInputError


def load_candidates(path: str | Path) -> list[dict[str, Any]]:
    """
    Read candidate actions from a JSON file.

    Args:
        path: Path to a JSON file holding a list of action objects

    Returns:
        List of candidate action dictionaries, in file order

    Raises:
        CandidateInputError: If the file is unreadable or malformed
    """
    file_path = Path(path)
    try:
        with open(file_path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise CandidateInputError(f"Cannot read actions file {file_path}: {e}") from e
    except UnicodeDecodeError as e:
        raise CandidateInputError(
            f"Cannot decode actions file {file_path}: {e}"
        ) from e
    except json.JSONDecodeError as e:
        raise CandidateInputError(f"Invalid JSON in {file_path}: {e}") from e

    if not isinstance(data, list):
        raise CandidateInputError(
            f"Expected a JSON list of actions in {file_path}, "
            f"got {type(data).__name__}"
        )

    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise CandidateInputError(
                f"Action at index {index} is not an object: {entry!r}"
            )

    return data

"""Read side of the JSON mapping artifact.

Applications load the mapping once and resolve canonical asset references
against it without touching the asset tree.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional, Union

from .errors import EncodingError


def load_mapping(path: Union[str, Path]) -> Dict[str, str]:
    """Load a JSON mapping file written by `JsonMappingDumper`.

    Raises:
        FileNotFoundError: the file does not exist.
        EncodingError: the content is not a flat object of strings.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise EncodingError(f"Invalid assets mapping JSON in {str(path)!r}: {e}") from e
    if not isinstance(data, dict):
        raise EncodingError(f"Assets mapping in {str(path)!r} is not a JSON object")
    for key, value in data.items():
        if not isinstance(value, str):
            raise EncodingError(f"Assets mapping value for {key!r} is not a string")
    return data


def resolve_asset(mapping: Dict[str, str], path: str) -> Optional[str]:
    """Return the fingerprinted path for a canonical asset path, or None."""
    return mapping.get(path.lstrip("/"))


__all__ = ["load_mapping", "resolve_asset"]

"""Build canonical -> fingerprinted asset mappings from a compiled asset tree.

The package walks a directory of content-fingerprinted static assets,
reconstructs the canonical path of every fingerprinted file and persists the
mapping either as a flat JSON lookup table or as a generated Go source file.
"""

from .builder import build_mappings, collect_mappings
from .errors import (
    AssetMappingError,
    EncodingError,
    FormatToolError,
    TraversalError,
    WriteError,
)
from .models import MappingEntry, MappingSet

__all__ = [
    "build_mappings",
    "collect_mappings",
    "AssetMappingError",
    "EncodingError",
    "FormatToolError",
    "TraversalError",
    "WriteError",
    "MappingEntry",
    "MappingSet",
]

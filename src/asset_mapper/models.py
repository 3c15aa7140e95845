"""Pydantic models for the canonical -> fingerprinted asset mapping.

A `MappingSet` is created empty at the start of a build, filled by the tree
walker in traversal order, optionally sorted, and handed to exactly one
dumper. Nothing here outlives a single build.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class MappingEntry(BaseModel):
    """One asset: its stable canonical path and its on-disk fingerprinted path.

    Both paths are slash-separated and relative to the asset root.
    """

    canonical_path: str
    fingerprinted_path: str


class MappingSet(BaseModel):
    """Ordered accumulator of mapping entries.

    Duplicate canonical paths are allowed; collapsing them is up to the dumper.
    """

    entries: List[MappingEntry] = Field(default_factory=list)
    # Declared package name of the generated source module (Go dumper only)
    package_name: Optional[str] = None

    def add_item(self, canonical_path: str, fingerprinted_path: str) -> MappingEntry:
        entry = MappingEntry(canonical_path=canonical_path, fingerprinted_path=fingerprinted_path)
        self.entries.append(entry)
        return entry

    def sort(self) -> None:
        """Sort entries in place by ascending canonical path (stable)."""
        self.entries.sort(key=lambda e: e.canonical_path)

    def to_dict(self) -> Dict[str, str]:
        """Collapse to a lookup table; later duplicates overwrite earlier ones."""
        return {e.canonical_path: e.fingerprinted_path for e in self.entries}

    def duplicates(self) -> List[str]:
        """Return canonical paths that occur more than once, in first-seen order."""
        seen: set[str] = set()
        reported: set[str] = set()
        dupes: List[str] = []
        for e in self.entries:
            if e.canonical_path in seen and e.canonical_path not in reported:
                dupes.append(e.canonical_path)
                reported.add(e.canonical_path)
            seen.add(e.canonical_path)
        return dupes

    def __len__(self) -> int:
        return len(self.entries)


__all__ = ["MappingEntry", "MappingSet"]

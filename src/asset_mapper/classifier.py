"""Decide which files belong in the asset mapping and compute canonical paths.

A fingerprinted asset lives under one of the known category directories and
its base name starts with a fixed-width marker: the literal tag ``fp`` followed
by the content hash, 35 characters in total. The canonical path is the same
relative path with that marker removed from the base name.
"""
from __future__ import annotations

from typing import Optional, Tuple

ASSET_CATEGORIES: frozenset[str] = frozenset({"images", "javascripts", "stylesheets"})
FINGERPRINT_TAG = "fp"
FINGERPRINT_PREFIX_LEN = 35


def is_fingerprinted(filename: str) -> bool:
    """Return True if a base name carries a fingerprint marker.

    The name must be strictly longer than the marker so that an original base
    name remains once the marker is stripped.
    """
    return filename.startswith(FINGERPRINT_TAG) and len(filename) > FINGERPRINT_PREFIX_LEN


def canonical_path(rel_path: str) -> str:
    """Strip the fingerprint marker from the base name of ``rel_path``.

    Directory segments are returned untouched. The caller is expected to have
    checked `is_fingerprinted` on the base name.
    """
    head, sep, base = rel_path.rpartition("/")
    return f"{head}{sep}{base[FINGERPRINT_PREFIX_LEN:]}"


def classify(rel_path: str, *, is_dir: bool = False) -> Optional[Tuple[str, str]]:
    """Classify a path relative to the asset root.

    Args:
        rel_path: Slash-separated path relative to the asset root.
        is_dir: Directory entries never match.

    Returns:
        ``(canonical, fingerprinted)`` for a mapped asset, otherwise None.
        Non-matching paths are skipped silently, never reported as errors.
    """
    if is_dir:
        return None
    parts = rel_path.split("/")
    if len(parts) < 2 or parts[0] not in ASSET_CATEGORIES:
        return None
    if not is_fingerprinted(parts[-1]):
        return None
    return canonical_path(rel_path), rel_path


__all__ = [
    "ASSET_CATEGORIES",
    "FINGERPRINT_TAG",
    "FINGERPRINT_PREFIX_LEN",
    "is_fingerprinted",
    "canonical_path",
    "classify",
]

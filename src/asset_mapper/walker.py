"""Recursive walk of the compiled asset tree.

`walk_assets` visits every entry below the asset root once, in lexical order,
and appends each fingerprinted file to a `MappingSet`. Any filesystem error
aborts the walk with `TraversalError`; a partially filled mapping is never
returned.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator, Optional, Union

from .classifier import classify
from .errors import TraversalError
from .models import MappingSet

logger = logging.getLogger(__name__)


def _raise_traversal_error(err: OSError) -> None:
    raise TraversalError(
        f"Cannot walk asset directory {err.filename!r}: {err.strerror or err}",
        path=err.filename,
    ) from err


def iter_asset_files(root: Union[str, Path]) -> Iterator[str]:
    """Yield every regular file below ``root`` as a slash-separated relative path.

    Directories are descended in sorted order so repeated walks of an
    unchanged tree yield identical sequences.

    Raises:
        TraversalError: root missing, not a directory, or unreadable below.
    """
    root_path = os.fspath(root)
    if not os.path.exists(root_path):
        raise TraversalError(f"Asset root does not exist: {root_path!r}", path=root_path)
    if not os.path.isdir(root_path):
        raise TraversalError(f"Asset root is not a directory: {root_path!r}", path=root_path)

    for dirpath, dirnames, filenames in os.walk(root_path, onerror=_raise_traversal_error):
        dirnames.sort()
        rel_dir = os.path.relpath(dirpath, root_path)
        for name in sorted(filenames):
            rel = name if rel_dir == os.curdir else os.path.join(rel_dir, name)
            yield Path(rel).as_posix()


def walk_assets(root: Union[str, Path], mapping: Optional[MappingSet] = None) -> MappingSet:
    """Collect the canonical -> fingerprinted mapping for an asset tree.

    Args:
        root: Asset root directory (e.g. ``public``).
        mapping: Optional collection to append to; a new one is created if None.

    Returns:
        The populated mapping in traversal order.

    Raises:
        TraversalError: the walk could not complete.
    """
    collected = MappingSet()
    for rel in iter_asset_files(root):
        match = classify(rel)
        if match is None:
            logger.debug("Skipping non-fingerprinted asset %s", rel)
            continue
        src, target = match
        collected.add_item(src, target)

    for dupe in collected.duplicates():
        logger.warning("Canonical asset path %s maps to more than one fingerprinted file", dupe)

    if mapping is None:
        return collected
    # Only extend the caller's collection once the walk has fully succeeded.
    mapping.entries.extend(collected.entries)
    return mapping


__all__ = ["iter_asset_files", "walk_assets"]

"""Build driver: walk the asset tree, then persist the mapping once.

`build_mappings` is the single entry point used by the CLI. It runs the
steps sequentially and either produces the complete artifact or raises an
`AssetMappingError`; nothing is written when the walk fails.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .config import Settings, get_settings
from .dumpers import MappingDumper, MappingTemplate, select_dumper
from .models import MappingSet
from .walker import walk_assets

logger = logging.getLogger(__name__)


def collect_mappings(settings: Optional[Settings] = None) -> MappingSet:
    """Walk the configured asset root and return the mapping in traversal order."""
    settings = settings or get_settings()
    mapping = walk_assets(settings.ASSETS_ROOT)
    logger.info("Collected %d fingerprinted asset(s) under %s", len(mapping), settings.ASSETS_ROOT)
    return mapping


def build_mappings(
    settings: Optional[Settings] = None,
    *,
    production: bool = False,
    dumper: Optional[MappingDumper] = None,
    template: Optional[MappingTemplate] = None,
) -> Path:
    """Build and persist the asset mapping.

    Args:
        settings: Configuration; defaults to the cached process settings.
        production: Build mode. Accepted for interface stability; it does not
            change how the mapping is built or written.
        dumper: Explicit persistence strategy, bypassing `select_dumper`.
        template: Template handed to the Go dumper when one is selected.

    Returns:
        Path of the written artifact.

    Raises:
        AssetMappingError: any step failed; see `asset_mapper.errors`.
    """
    settings = settings or get_settings()
    logger.debug("Building assets mapping (production=%s)", production)
    mapping = collect_mappings(settings)
    if dumper is None:
        dumper = select_dumper(settings, template=template)
    return dumper.dump(mapping)


__all__ = ["build_mappings", "collect_mappings"]

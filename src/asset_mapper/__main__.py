"""Main CLI entry point for asset-mapper.

This module provides a command-line interface using Typer:

- ``build`` walks the compiled asset tree and writes the mapping artifact
  (JSON or generated Go source, chosen from configuration).
- ``resolve`` looks up a canonical asset path in a JSON mapping file.

Configuration comes from the environment / ``.env`` (see
`asset_mapper.config`); command-line options override individual settings.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import typer
from dotenv import find_dotenv, load_dotenv

from .builder import build_mappings, collect_mappings
from .config import get_settings
from .errors import AssetMappingError
from .lookup import load_mapping, resolve_asset

app = typer.Typer(help="Fingerprinted asset mapping builder")
logger = logging.getLogger(__name__)


@app.callback()
def main() -> None:
    """asset-mapper CLI.

    Use a subcommand like 'build' to run a process.
    """
    env_file = find_dotenv(usecwd=True)
    if env_file:
        load_dotenv(env_file)
        logger.debug("Loaded environment from %s", env_file)


@app.command(help="Scan the asset tree and persist the canonical -> fingerprinted mapping.")
def build(
    production: bool = typer.Option(
        False,
        "--production/--development",
        help="Build mode. Accepted for compatibility; does not change the generated mapping.",
    ),
    assets_root: Optional[str] = typer.Option(
        None, help="Asset tree root (overrides ASSETS_ROOT)"
    ),
    json_output: Optional[str] = typer.Option(
        None, help="Write the mapping as JSON to this path (overrides ASSETS_MAPPING_JSON)"
    ),
    package: Optional[str] = typer.Option(
        None, help="Go import path for assets_gen.go (overrides ASSETS_MAPPING_PKG)"
    ),
    package_relative: Optional[str] = typer.Option(
        None, help="Relative Go package directory (overrides ASSETS_MAPPING_PKG_RELATIVE)"
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run/--no-dry-run",
        help="Print the sorted mapping instead of writing an artifact.",
    ),
) -> None:
    """Run one mapping build.

    Exits with status 1 if any step fails; the artifact is either written
    completely or the failure is reported.
    """
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    overrides: dict[str, Any] = {}
    if assets_root is not None:
        overrides["ASSETS_ROOT"] = assets_root.strip()
    if json_output is not None:
        overrides["ASSETS_MAPPING_JSON"] = json_output.strip()
    if package is not None:
        overrides["ASSETS_MAPPING_PKG"] = package.strip()
    if package_relative is not None:
        overrides["ASSETS_MAPPING_PKG_RELATIVE"] = package_relative.strip()
    if overrides:
        settings = settings.model_copy(update=overrides)

    try:
        if dry_run:
            mapping = collect_mappings(settings)
            mapping.sort()
            for entry in mapping.entries:
                typer.echo(f"{entry.canonical_path} -> {entry.fingerprinted_path}")
            typer.echo(f"{len(mapping)} asset(s) mapped. dry_run=True")
            return
        target = build_mappings(settings, production=production)
    except AssetMappingError as e:
        logger.error("Assets mapping build failed: %s", e)
        stderr = getattr(e, "stderr", "")
        if stderr:
            typer.echo(stderr.rstrip(), err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Assets mapping written to {target}")


@app.command(help="Print the fingerprinted path for a canonical asset path.")
def resolve(
    canonical: str = typer.Argument(..., help="Canonical asset path, e.g. javascripts/app/main.js"),
    mapping_file: Optional[Path] = typer.Option(
        None, help="JSON mapping file (defaults to ASSETS_MAPPING_JSON)"
    ),
) -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)
    path = mapping_file or (Path(settings.ASSETS_MAPPING_JSON) if settings.ASSETS_MAPPING_JSON else None)
    if path is None:
        typer.echo("No mapping file given and ASSETS_MAPPING_JSON is not set", err=True)
        raise typer.Exit(code=2)
    try:
        mapping = load_mapping(path)
    except (OSError, AssetMappingError) as e:
        typer.echo(f"Cannot load assets mapping: {e}", err=True)
        raise typer.Exit(code=1)
    target = resolve_asset(mapping, canonical)
    if target is None:
        typer.echo(f"No fingerprinted asset for {canonical}", err=True)
        raise typer.Exit(code=1)
    typer.echo(target)


if __name__ == "__main__":  # pragma: no cover
    app()

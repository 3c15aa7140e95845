"""Persistence strategies for a built asset mapping.

Two dumpers exist and exactly one runs per build:

- `JsonMappingDumper` writes a flat ``{canonical: fingerprinted}`` JSON object.
- `GoPackageMappingDumper` renders a Go source file declaring a package-level
  ``map[string]string`` and normalizes it with ``gofmt``.

`select_dumper` picks between them: a configured JSON path always wins.
"""
from __future__ import annotations

import json
import logging
import os
import subprocess
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from string import Template
from typing import Optional, Sequence, Tuple

from .config import Settings
from .errors import EncodingError, FormatToolError, WriteError
from .models import MappingSet

logger = logging.getLogger(__name__)

GO_MAPPING_FILENAME = "assets_gen.go"
DEFAULT_PACKAGE = "main"
# Package names that mean "no package configured"
DEFAULT_PACKAGE_SENTINELS = frozenset({"", ".", DEFAULT_PACKAGE})

GO_MAPPING_TEMPLATE = """\
// This file is generated by asset-mapper
// Containing all the assets mapping data for your router reverse lookup
// Better not to edit this.

package ${package_name}

var allAssetsMapping = map[string]string{
${entries}}
"""


class MappingDumper(ABC):
    """Persists a mapping collection to a durable artifact."""

    @abstractmethod
    def dump(self, mapping: MappingSet) -> Path:
        """Write the artifact and return its path."""


def _encode_utf8(text: str, what: str) -> bytes:
    """Encode ``text`` as UTF-8, rejecting undecodable filenames (lone surrogates)."""
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        bad = text[max(e.start - 40, 0) : e.end + 20]
        raise EncodingError(f"Cannot encode {what} as UTF-8 near {bad!r}: {e.reason}") from e


def _atomic_write_bytes(path: Path, data: bytes) -> None:
    """Write ``data`` to a sibling temp file then rename it over ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


class JsonMappingDumper(MappingDumper):
    """Writes the mapping as a 2-space indented JSON object.

    Duplicate canonical paths collapse last-write-wins. The file is replaced
    atomically so readers never observe a half-written mapping.
    """

    def __init__(self, json_file: str | Path):
        self.json_file = Path(json_file)

    def encode(self, mapping: MappingSet) -> bytes:
        try:
            text = json.dumps(mapping.to_dict(), indent=2, ensure_ascii=False) + "\n"
        except (TypeError, ValueError) as e:
            raise EncodingError(f"Cannot encode the assets mapping into JSON: {e}") from e
        return _encode_utf8(text, "the assets mapping JSON")

    def dump(self, mapping: MappingSet) -> Path:
        data = self.encode(mapping)
        try:
            _atomic_write_bytes(self.json_file, data)
        except OSError as e:
            logger.error("Failed to write JSON mapping file %s: %s", self.json_file, e)
            raise WriteError(
                f"Cannot write the assets mapping JSON file {str(self.json_file)!r}: {e}",
                path=str(self.json_file),
            ) from e
        logger.info("Saved assets mapping JSON file: %s (%d entries)", self.json_file, len(mapping))
        return self.json_file


def go_string_literal(value: str) -> str:
    """Quote ``value`` as a Go interpreted string literal.

    JSON string escapes (``\\"``, ``\\\\``, ``\\n``, ``\\uXXXX``) are all valid in
    Go, so the JSON encoder doubles as a Go quoter.
    """
    return json.dumps(value, ensure_ascii=False)


class MappingTemplate:
    """Renders a sorted mapping into Go source.

    Constructed explicitly and handed to the dumper rather than held as a
    module-level global.
    """

    def __init__(self, source: str = GO_MAPPING_TEMPLATE, indent: str = "\t"):
        self._template = Template(source)
        self.indent = indent

    def render(self, mapping: MappingSet) -> str:
        if not mapping.package_name:
            raise EncodingError("Cannot render assets mapping without a package name")
        lines = "".join(
            f"{self.indent}{go_string_literal(e.canonical_path)}: "
            f"{go_string_literal(e.fingerprinted_path)},\n"
            for e in mapping.entries
        )
        try:
            return self._template.substitute(package_name=mapping.package_name, entries=lines)
        except (KeyError, ValueError) as e:
            raise EncodingError(f"Cannot generate assets mapping file: {e}") from e


class GoPackageMappingDumper(MappingDumper):
    """Generates ``assets_gen.go`` holding the mapping as a Go map literal.

    Output is sorted by canonical path, so an unchanged asset tree always
    produces byte-identical source.
    """

    def __init__(
        self,
        pkg_name: str = "",
        pkg_name_relative: str = "",
        *,
        gopath: str = "",
        formatter: Sequence[str] = ("gofmt",),
        template: Optional[MappingTemplate] = None,
    ):
        self.pkg_name = pkg_name
        self.pkg_name_relative = pkg_name_relative
        self.gopath = gopath
        self.formatter = list(formatter)
        self.template = template if template is not None else MappingTemplate()

    def get_pkg_path(self) -> Tuple[str, Path]:
        """Resolve the declared package name and destination file.

        Resolution order:
        1. relative package directory, used verbatim as directory and name;
        2. import path under ``$GOPATH/src``, named after its last segment;
        3. package ``main`` in the current working directory.
        """
        if self.pkg_name_relative:
            return self.pkg_name_relative, Path(self.pkg_name_relative) / GO_MAPPING_FILENAME
        pkg = self.pkg_name.strip("/")
        if pkg in DEFAULT_PACKAGE_SENTINELS:
            return DEFAULT_PACKAGE, Path(GO_MAPPING_FILENAME)
        target = Path(self.gopath, "src", *pkg.split("/"), GO_MAPPING_FILENAME)
        return pkg.rsplit("/", 1)[-1], target

    def render(self, mapping: MappingSet) -> str:
        return self.template.render(mapping)

    def run_formatter(self, target: Path) -> None:
        """Run ``<formatter> -w <target>``; raise FormatToolError on failure."""
        cmd = [*self.formatter, "-w", str(target)]
        try:
            proc = subprocess.run(cmd, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE, check=False)
        except OSError as e:
            logger.error("Failed to launch formatter %s: %s", cmd[0], e)
            raise FormatToolError(f"Cannot run formatter {cmd[0]!r}: {e}", command=cmd) from e
        stderr = proc.stderr.decode("utf-8", errors="replace")
        if proc.returncode != 0:
            logger.error("Failed to gofmt source code %s: %s", target, stderr.strip())
            raise FormatToolError(
                f"Formatter {cmd[0]!r} exited with status {proc.returncode} for {str(target)!r}",
                command=cmd,
                returncode=proc.returncode,
                stderr=stderr,
            )

    def dump(self, mapping: MappingSet) -> Path:
        pkg_name, target = self.get_pkg_path()
        mapping.package_name = pkg_name
        mapping.sort()

        # Fully encode before touching the destination so a failure never truncates it.
        source = _encode_utf8(self.render(mapping), "the assets mapping Go source")
        try:
            _atomic_write_bytes(target, source)
        except OSError as e:
            raise WriteError(
                f"Cannot create the assets mapping Go file {str(target)!r}: {e}", path=str(target)
            ) from e

        self.run_formatter(target)
        logger.info("Saved assets mapping Go file: %s (package %s, %d entries)", target, pkg_name, len(mapping))
        return target


def select_dumper(settings: Settings, template: Optional[MappingTemplate] = None) -> MappingDumper:
    """Choose the persistence strategy for this build.

    A non-empty ``ASSETS_MAPPING_JSON`` selects JSON even when a Go package is
    also configured.
    """
    if settings.ASSETS_MAPPING_JSON:
        return JsonMappingDumper(settings.ASSETS_MAPPING_JSON)
    return GoPackageMappingDumper(
        settings.ASSETS_MAPPING_PKG,
        settings.ASSETS_MAPPING_PKG_RELATIVE,
        gopath=settings.gopath(),
        formatter=settings.formatter_command(),
        template=template,
    )


__all__ = [
    "GO_MAPPING_FILENAME",
    "GO_MAPPING_TEMPLATE",
    "MappingDumper",
    "JsonMappingDumper",
    "GoPackageMappingDumper",
    "MappingTemplate",
    "go_string_literal",
    "select_dumper",
]

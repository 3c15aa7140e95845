"""Application configuration management using Pydantic Settings.

This module defines the `Settings` class, which loads configuration parameters
from environment variables and a `.env` file: where the compiled asset tree
lives, which persistence strategy to use and where its artifact goes, and how
the generated Go source is formatted.

The `get_settings` function provides a cached, singleton instance of the
configuration, ensuring consistent settings throughout the application.
"""
from __future__ import annotations

import os
import shlex
from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict as _SettingsConfigDict


class Settings(BaseSettings):
    """Defines all application configuration parameters.

    Values come from environment variables or a `.env` file. Blank strings
    are meaningful: an empty `ASSETS_MAPPING_JSON` selects the Go source
    strategy, an empty `ASSETS_MAPPING_PKG` falls back to package `main`.
    """

    model_config = _SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Input
    ASSETS_ROOT: str = Field(
        default="public",
        description="Root of the compiled asset tree (contains images/, javascripts/, stylesheets/)",
    )

    # Output selection. A non-empty JSON path always wins over the Go package.
    ASSETS_MAPPING_JSON: str = Field(
        default="",
        description="Write the mapping as a JSON object to this path (selects the JSON dumper)",
    )
    ASSETS_MAPPING_PKG: str = Field(
        default="",
        description=(
            "Go import path of the package receiving assets_gen.go, resolved under "
            "$GOPATH/src. Blank, '.' or 'main' writes package main to the working directory."
        ),
    )
    ASSETS_MAPPING_PKG_RELATIVE: str = Field(
        default="",
        description=(
            "Relative package directory used verbatim as destination and package name. "
            "Takes precedence over ASSETS_MAPPING_PKG."
        ),
    )

    # Go toolchain
    GOPATH: str = Field(
        default="",
        description="Go workspace root used to resolve ASSETS_MAPPING_PKG (blank = ~/go)",
    )
    GOFMT_COMMAND: str = Field(
        default="gofmt",
        description="Formatter command run as '<command> -w <file>' after generating Go source",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    @field_validator(
        "ASSETS_ROOT",
        "ASSETS_MAPPING_JSON",
        "ASSETS_MAPPING_PKG",
        "ASSETS_MAPPING_PKG_RELATIVE",
        "GOPATH",
        "GOFMT_COMMAND",
        mode="before",
    )
    @classmethod
    def strip_whitespace(cls, v: Any) -> str:
        """Trim surrounding whitespace; None becomes the empty string."""
        if v is None:
            return ""
        return str(v).strip()

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        if v is None or not str(v).strip():
            return "INFO"
        return str(v).strip().upper()

    def gopath(self) -> str:
        """Return the effective Go workspace root.

        Mirrors the Go toolchain default of `$HOME/go` when GOPATH is unset.
        """
        if self.GOPATH:
            # GOPATH may be a list; the first entry is where `go get` writes.
            return self.GOPATH.split(os.pathsep)[0]
        return os.path.join(os.path.expanduser("~"), "go")

    def formatter_command(self) -> list[str]:
        """Return the formatter argv prefix parsed from GOFMT_COMMAND."""
        return shlex.split(self.GOFMT_COMMAND) or ["gofmt"]


@lru_cache(maxsize=1)
def get_settings() -> Settings:  # pragma: no cover - trivial
    """Return a cached, singleton instance of the application settings."""
    return Settings()


__all__ = ["Settings", "get_settings"]

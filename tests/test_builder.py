from __future__ import annotations

import json
import sys

import pytest

from asset_mapper.builder import build_mappings, collect_mappings
from asset_mapper.config import Settings
from asset_mapper.dumpers import GO_MAPPING_FILENAME, JsonMappingDumper
from asset_mapper.errors import TraversalError

from conftest import FP_PREFIX_A, FP_PREFIX_B

NOOP_GOFMT = f"{sys.executable} -c pass"


def test_build_json_end_to_end(asset_tree, tmp_path):
    out = tmp_path / "out" / "assets.json"
    settings = Settings(ASSETS_ROOT=str(asset_tree), ASSETS_MAPPING_JSON=str(out))
    assert build_mappings(settings) == out
    assert json.loads(out.read_text()) == {
        "images/logo.png": f"images/{FP_PREFIX_A}logo.png",
        "javascripts/app/main.js": f"javascripts/app/{FP_PREFIX_B}main.js",
        "stylesheets/site.css": f"stylesheets/{FP_PREFIX_A}site.css",
    }


def test_json_wins_over_package(asset_tree, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = tmp_path / "assets.json"
    settings = Settings(
        ASSETS_ROOT=str(asset_tree),
        ASSETS_MAPPING_JSON=str(out),
        ASSETS_MAPPING_PKG_RELATIVE="assets",
        GOFMT_COMMAND=NOOP_GOFMT,
    )
    build_mappings(settings)
    assert out.exists()
    assert not (tmp_path / "assets").exists()
    assert not (tmp_path / GO_MAPPING_FILENAME).exists()


def test_build_go_module_is_reproducible(asset_tree, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    settings = Settings(
        ASSETS_ROOT=str(asset_tree),
        ASSETS_MAPPING_PKG_RELATIVE="assets",
        GOFMT_COMMAND=NOOP_GOFMT,
    )
    target = build_mappings(settings)
    first = (tmp_path / target).read_bytes()
    assert build_mappings(settings, production=True) == target
    assert (tmp_path / target).read_bytes() == first
    assert b"package assets\n" in first
    assert f'"images/logo.png": "images/{FP_PREFIX_A}logo.png"'.encode() in first


def test_production_flag_does_not_change_output(asset_tree, tmp_path):
    dev = build_mappings(
        Settings(ASSETS_ROOT=str(asset_tree), ASSETS_MAPPING_JSON=str(tmp_path / "dev.json"))
    )
    prod = build_mappings(
        Settings(ASSETS_ROOT=str(asset_tree), ASSETS_MAPPING_JSON=str(tmp_path / "prod.json")),
        production=True,
    )
    assert dev.read_bytes() == prod.read_bytes()


def test_traversal_failure_writes_nothing(tmp_path):
    out = tmp_path / "assets.json"
    settings = Settings(ASSETS_ROOT=str(tmp_path / "missing"), ASSETS_MAPPING_JSON=str(out))
    with pytest.raises(TraversalError):
        build_mappings(settings)
    assert not out.exists()


def test_explicit_dumper_bypasses_selector(asset_tree, tmp_path):
    out = tmp_path / "explicit.json"
    settings = Settings(ASSETS_ROOT=str(asset_tree), ASSETS_MAPPING_PKG="ignored/pkg")
    assert build_mappings(settings, dumper=JsonMappingDumper(out)) == out
    assert len(json.loads(out.read_text())) == 3


def test_collect_mappings_uses_configured_root(asset_tree):
    mapping = collect_mappings(Settings(ASSETS_ROOT=str(asset_tree)))
    assert len(mapping) == 3


def test_default_root_is_public_in_cwd(asset_tree, monkeypatch):
    monkeypatch.chdir(asset_tree.parent)
    assert len(collect_mappings(Settings())) == 3

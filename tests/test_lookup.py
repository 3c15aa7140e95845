from __future__ import annotations

import pytest

from asset_mapper.dumpers import JsonMappingDumper
from asset_mapper.errors import EncodingError
from asset_mapper.lookup import load_mapping, resolve_asset
from asset_mapper.walker import walk_assets

from conftest import FP_PREFIX_B


def test_load_what_the_json_dumper_wrote(asset_tree, tmp_path):
    out = JsonMappingDumper(tmp_path / "m.json").dump(walk_assets(asset_tree))
    mapping = load_mapping(out)
    assert resolve_asset(mapping, "javascripts/app/main.js") == f"javascripts/app/{FP_PREFIX_B}main.js"
    assert resolve_asset(mapping, "/javascripts/app/main.js") == f"javascripts/app/{FP_PREFIX_B}main.js"
    assert resolve_asset(mapping, "javascripts/missing.js") is None


@pytest.mark.parametrize("body", ["[1, 2]", "{\"a\": 1}", "not json"])
def test_invalid_mapping_files_raise_encoding_error(tmp_path, body):
    f = tmp_path / "m.json"
    f.write_text(body)
    with pytest.raises(EncodingError):
        load_mapping(f)


def test_missing_mapping_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_mapping(tmp_path / "absent.json")

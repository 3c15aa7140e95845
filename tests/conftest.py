import sys
from pathlib import Path

import pytest

# Ensure `src` is on sys.path for tests when not installed editable.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from asset_mapper.config import get_settings  # noqa: E402

FP_PREFIX_A = "fp" + "a" * 33
FP_PREFIX_B = "fp" + "0123456789abcdef0123456789abcdef0"

_ENV_KEYS = (
    "ASSETS_ROOT",
    "ASSETS_MAPPING_JSON",
    "ASSETS_MAPPING_PKG",
    "ASSETS_MAPPING_PKG_RELATIVE",
    "GOPATH",
    "GOFMT_COMMAND",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_tree(root: Path, files: list[str]) -> Path:
    for rel in files:
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(rel, encoding="utf-8")
    return root


@pytest.fixture
def asset_tree(tmp_path):
    """A small compiled asset tree with matches, decoys and a stray file."""
    root = tmp_path / "public"
    make_tree(
        root,
        [
            f"images/{FP_PREFIX_A}logo.png",
            f"javascripts/app/{FP_PREFIX_B}main.js",
            f"stylesheets/{FP_PREFIX_A}site.css",
            "stylesheets/plain.css",
            f"fonts/{FP_PREFIX_A}icons.woff",
            "images/fpshort.png",
            "README.md",
        ],
    )
    return root

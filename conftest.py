"""Configure pytest."""

import json
import os
import sys
from pathlib import Path
from typing import Iterator

import pytest

# Get the project root directory
root_dir = Path(__file__).parent

# Add src directory to Python path
src_path = str(root_dir / "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

# Remove any duplicate paths
sys.path = list(dict.fromkeys(sys.path))

# Set PYTHONPATH environment variable
os.environ["PYTHONPATH"] = src_path

from relnamer.models.taxonomy import Taxonomy  # noqa: E402
from relnamer.utils import config as cfg  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point the config file at a temp dir and drop RELNAMER_* overrides.

    Keeps tests independent of the developer's own config.toml and shell.
    """
    for name in list(os.environ):
        if name.startswith("RELNAMER_"):
            monkeypatch.delenv(name)
    config_dir = tmp_path / "config"
    monkeypatch.setattr(cfg, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(cfg, "CONFIG_FILE", config_dir / "config.toml")
    yield config_dir


TAXONOMY_DATA = {
    "categories": [
        {"name": "Type", "tags": [{"id": 1, "name": "Film"}, {"id": 2, "name": "Série"}]},
        {
            "name": "Résolution",
            "tags": [
                {"id": 10, "name": "1080p (Full HD)"},
                {"id": 11, "name": "2160p (4K)"},
                {"id": 12, "name": "720p (HD)"},
            ],
        },
        {
            "name": "Source",
            "tags": [
                {"id": 20, "name": "BluRay"},
                {"id": 21, "name": "WEB-DL"},
                {"id": 22, "name": "REMUX"},
                {"id": 23, "name": "WEB"},
            ],
        },
        {
            "name": "Codec vidéo",
            "tags": [
                {"id": 30, "name": "AVC/H264/x264"},
                {"id": 31, "name": "HEVC/H265/x265"},
            ],
        },
        {
            "name": "Codec audio",
            "tags": [
                {"id": 40, "name": "AC3"},
                {"id": 41, "name": "EAC3"},
                {"id": 42, "name": "DTS-HD MA"},
                {"id": 43, "name": "TrueHD"},
            ],
        },
        {
            "name": "Langue audio",
            "tags": [
                {"id": 50, "name": "Français"},
                {"id": 51, "name": "Anglais"},
                {"id": 52, "name": "VFF"},
                {"id": 53, "name": "VFQ"},
                {"id": 54, "name": "MULTI"},
                {"id": 55, "name": "VOSTFR"},
            ],
        },
        {
            "name": "Sous-titres",
            "tags": [{"id": 60, "name": "Français"}, {"id": 61, "name": "Anglais"}],
        },
        {"name": "Extension", "tags": [{"id": 70, "name": "MKV"}, {"id": 71, "name": "MP4"}]},
        {
            "name": "Genre",
            "tags": [
                {"id": 80, "name": "Drame"},
                {"id": 81, "name": "Téléfilm"},
                {"id": 82, "name": "Comédie"},
            ],
        },
        {
            "name": "HDR",
            "tags": [
                {"id": 90, "name": "HDR10"},
                {"id": 91, "name": "DV"},
                {"id": 92, "name": "HDR10+"},
            ],
        },
        {"name": "Divers", "tags": [{"id": 100, "name": "Pack Saison"}]},
    ]
}


@pytest.fixture
def taxonomy() -> Taxonomy:
    """A small taxonomy snapshot shaped like the tracker's export."""
    return Taxonomy.from_data(TAXONOMY_DATA)


@pytest.fixture
def taxonomy_file(tmp_path: Path) -> Path:
    """The same snapshot written to disk, for the CLI ``--taxonomy`` option."""
    path = tmp_path / "taxonomy.json"
    path.write_text(json.dumps(TAXONOMY_DATA), encoding="utf-8")
    return path

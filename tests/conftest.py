"""Shared test fixtures for LANPlay."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from lanplay.config.loader import clear_config_cache
from lanplay.config.models import DEFAULT_EXTENSIONS
from lanplay.library.cache import LibraryCache
from lanplay.library.models import THUMBNAILS_DIR
from lanplay.library.orchestrator import LibraryScanner
from lanplay.library.service import LibraryService
from lanplay.library.thumbnails import ThumbnailGenerator

FAKE_JPEG = b"\xff\xd8\xff\xe0fake-jpeg"


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point LANPlay at a per-test data directory and drop LANPLAY_* vars."""
    for var in list(os.environ):
        if var.startswith("LANPLAY_"):
            monkeypatch.delenv(var)
    monkeypatch.setenv("LANPLAY_DATA_DIR", str(tmp_path / "lanplay-data"))
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """The data directory used by isolated_environment."""
    return tmp_path / "lanplay-data"


@pytest.fixture
def media_root(tmp_path: Path) -> Path:
    """Create an empty media root with the three category folders."""
    root = tmp_path / "media"
    for folder in ("Movies", "Music", "Series"):
        (root / folder).mkdir(parents=True)
    return root


@pytest.fixture
def fake_ffmpeg():
    """Stub ffmpeg: every call succeeds and writes the target thumbnail."""

    def _run(args, timeout=None, **kwargs):
        Path(args[-1]).write_bytes(FAKE_JPEG)
        return "", "", 0

    with patch("lanplay.library.thumbnails.run_command", side_effect=_run) as mock:
        yield mock


@pytest.fixture
def failing_ffmpeg():
    """Stub ffmpeg: every call exits non-zero without writing output."""
    with patch(
        "lanplay.library.thumbnails.run_command",
        return_value=("", "Invalid data found when processing input", 1),
    ) as mock:
        yield mock


@pytest.fixture
def make_service(media_root: Path, data_dir: Path):
    """Factory for a LibraryService over media_root and data_dir."""

    def _make(root: Path | None = None, extensions=DEFAULT_EXTENSIONS):
        root = root if root is not None else media_root
        generator = ThumbnailGenerator(root / THUMBNAILS_DIR)
        cache = LibraryCache(
            data_dir / "cache" / "library.json",
            data_dir / "data" / "data.json",
        )
        scanner = LibraryScanner(root, cache, generator, extensions=extensions)
        return LibraryService(scanner, cache)

    return _make


@pytest.fixture
def library_service(make_service) -> LibraryService:
    """LibraryService over the default media_root fixture."""
    return make_service()

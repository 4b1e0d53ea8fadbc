"""Tests for the library scan orchestrator."""

import json
from pathlib import Path

import pytest

from lanplay.library.exceptions import MediaRootNotFoundError


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch()
    return path


class TestScanLibrary:
    """Tests for LibraryScanner.scan_library()."""

    def test_scans_all_categories(self, media_root, library_service, fake_ffmpeg):
        _touch(media_root / "Movies" / "Heat.mkv")
        _touch(media_root / "Music" / "song.mp3")
        _touch(media_root / "Series" / "Show" / "S01E01.mp4")

        library = library_service.scanner.scan_library()

        assert [e.name for e in library.movies] == ["Heat.mkv"]
        assert [e.name for e in library.music] == ["song.mp3"]
        assert [e.name for e in library.series["Show"]] == ["S01E01.mp4"]
        assert library.movies[0].thumbnail == "/thumbnails/Heat.jpg"
        assert library.series["Show"][0].thumbnail == "/thumbnails/S01E01.jpg"

    def test_second_scan_reuses_thumbnails(
        self, media_root, library_service, fake_ffmpeg
    ):
        _touch(media_root / "Movies" / "Heat.mkv")
        _touch(media_root / "Series" / "Show" / "S01E01.mp4")

        library_service.scanner.scan_library()
        library_service.scanner.scan_library()

        assert fake_ffmpeg.call_count == 2
        thumbs = sorted(p.name for p in (media_root / "thumbnails").iterdir())
        assert thumbs == ["Heat.jpg", "S01E01.jpg"]

    def test_music_is_never_thumbnailed(
        self, media_root, library_service, fake_ffmpeg
    ):
        _touch(media_root / "Music" / "concert.mp4")

        library = library_service.scanner.scan_library()

        assert library.music[0].thumbnail is None
        fake_ffmpeg.assert_not_called()

    def test_removes_orphan_thumbnails(
        self, media_root, library_service, fake_ffmpeg
    ):
        _touch(media_root / "Movies" / "Heat.mkv")
        _touch(media_root / "thumbnails" / "Deleted.jpg")

        library_service.scanner.scan_library()

        assert (media_root / "thumbnails" / "Heat.jpg").exists()
        assert not (media_root / "thumbnails" / "Deleted.jpg").exists()
        assert library_service.last_result.orphans_removed == 1

    def test_thumbnail_of_music_file_is_orphan(
        self, media_root, library_service, fake_ffmpeg
    ):
        _touch(media_root / "Music" / "song.mp3")
        _touch(media_root / "thumbnails" / "song.jpg")

        library_service.scanner.scan_library()

        assert not (media_root / "thumbnails" / "song.jpg").exists()

    def test_series_one_level_deep(self, media_root, library_service, fake_ffmpeg):
        _touch(media_root / "Series" / "ShowA" / "ep1.mkv")
        _touch(media_root / "Series" / "ShowB" / "ep1.mp4")
        _touch(media_root / "Series" / "ShowB" / "Season 2" / "ep2.mp4")
        _touch(media_root / "Series" / "loose.mp4")
        (media_root / "Series" / "Empty").mkdir()

        library = library_service.scanner.scan_library()

        assert set(library.series) == {"ShowA", "ShowB", "Empty"}
        assert [e.name for e in library.series["ShowB"]] == ["ep1.mp4"]
        assert library.series["Empty"] == []
        assert library_service.last_result.shows_found == 3

    def test_missing_category_folder(self, media_root, library_service, fake_ffmpeg):
        (media_root / "Music").rmdir()
        _touch(media_root / "Movies" / "Heat.mkv")

        library = library_service.scanner.scan_library()

        assert library.music == []
        assert library_service.last_result.categories_skipped == ["Music"]
        assert library_service.cache.read_cache()["music"] == []

    def test_empty_media_root(self, tmp_path, make_service):
        root = tmp_path / "bare"
        root.mkdir()
        service = make_service(root)

        library = service.scanner.scan_library()

        assert library.to_cache_dict() == {"movies": [], "music": [], "series": {}}
        assert (root / "thumbnails").is_dir()

    def test_missing_media_root_raises(self, tmp_path, make_service):
        service = make_service(tmp_path / "absent")

        with pytest.raises(MediaRootNotFoundError):
            service.scanner.scan_library()

        assert not service.cache.exists()

    def test_failed_thumbnail_is_counted(
        self, media_root, library_service, failing_ffmpeg
    ):
        _touch(media_root / "Movies" / "broken.mkv")

        library = library_service.scanner.scan_library()

        assert library.movies[0].thumbnail is None
        assert library_service.last_result.thumbnails_failed == 1

    def test_persists_both_artifacts(
        self, media_root, data_dir, library_service, fake_ffmpeg
    ):
        _touch(media_root / "Movies" / "Heat.mkv")

        library = library_service.scanner.scan_library()

        cache_view = json.loads((data_dir / "cache" / "library.json").read_text())
        data_view = json.loads((data_dir / "data" / "data.json").read_text())
        assert cache_view == library.to_cache_dict()
        assert data_view["movies"][0]["filePath"] == str(
            media_root / "Movies" / "Heat.mkv"
        )

    def test_respects_extension_allow_list(
        self, media_root, make_service, fake_ffmpeg
    ):
        _touch(media_root / "Movies" / "a.mkv")
        _touch(media_root / "Movies" / "b.mp4")
        service = make_service(extensions=(".mp4",))

        library = service.scanner.scan_library()

        assert [e.name for e in library.movies] == ["b.mp4"]

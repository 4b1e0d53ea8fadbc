"""Tests for thumbnail extraction."""

import subprocess
from pathlib import Path
from unittest.mock import patch

from lanplay.library.thumbnails import (
    ThumbnailGenerator,
    thumbnail_name,
    thumbnail_url,
)


class TestThumbnailNames:
    """Tests for the deterministic naming helpers."""

    def test_name_replaces_extension(self):
        assert thumbnail_name("Heat.mkv") == "Heat.jpg"

    def test_name_keeps_inner_dots(self):
        assert thumbnail_name("The.Matrix.1999.mp4") == "The.Matrix.1999.jpg"

    def test_url_uses_thumbnails_prefix(self):
        assert thumbnail_url(Path("/srv/media/thumbnails/Heat.jpg")) == (
            "/thumbnails/Heat.jpg"
        )


class TestBuildCommand:
    """Tests for the ffmpeg command line."""

    def test_default_command(self, tmp_path: Path):
        generator = ThumbnailGenerator(tmp_path)
        video = Path("/srv/media/Movies/Heat.mkv")
        target = tmp_path / "Heat.jpg"

        args = generator.build_command(video, target)

        assert args == [
            "ffmpeg",
            "-y",
            "-ss",
            "00:01:00",
            "-i",
            video,
            "-vf",
            "scale=854:-1",
            "-frames:v",
            "1",
            target,
        ]

    def test_custom_settings(self, tmp_path: Path):
        generator = ThumbnailGenerator(
            tmp_path,
            ffmpeg_path=Path("/opt/ffmpeg/bin/ffmpeg"),
            offset="00:00:05",
            width=320,
        )

        args = generator.build_command(Path("a.mp4"), tmp_path / "a.jpg")

        assert args[0] == "/opt/ffmpeg/bin/ffmpeg"
        assert args[3] == "00:00:05"
        assert args[7] == "scale=320:-1"


class TestGenerate:
    """Tests for ThumbnailGenerator.generate()."""

    def test_creates_thumbnail(self, tmp_path: Path, fake_ffmpeg):
        generator = ThumbnailGenerator(tmp_path / "thumbnails")

        result = generator.generate(tmp_path / "Heat.mkv", "Heat.mkv")

        assert result == tmp_path / "thumbnails" / "Heat.jpg"
        assert result.exists()
        fake_ffmpeg.assert_called_once()

    def test_passes_timeout(self, tmp_path: Path, fake_ffmpeg):
        generator = ThumbnailGenerator(tmp_path, timeout=30)

        generator.generate(tmp_path / "Heat.mkv", "Heat.mkv")

        assert fake_ffmpeg.call_args.kwargs["timeout"] == 30

    def test_reuses_existing_thumbnail(self, tmp_path: Path, fake_ffmpeg):
        existing = tmp_path / "Heat.jpg"
        existing.write_bytes(b"old")
        generator = ThumbnailGenerator(tmp_path)

        result = generator.generate(tmp_path / "Heat.mkv", "Heat.mkv")

        assert result == existing
        assert existing.read_bytes() == b"old"
        fake_ffmpeg.assert_not_called()

    def test_nonzero_exit_returns_none(self, tmp_path: Path, failing_ffmpeg):
        generator = ThumbnailGenerator(tmp_path)

        assert generator.generate(tmp_path / "bad.mp4", "bad.mp4") is None
        assert not (tmp_path / "bad.jpg").exists()

    def test_nonzero_exit_removes_partial_output(self, tmp_path: Path):
        def _partial(args, timeout=None, **kwargs):
            Path(args[-1]).write_bytes(b"trunc")
            return "", "error", 1

        generator = ThumbnailGenerator(tmp_path)
        with patch("lanplay.library.thumbnails.run_command", side_effect=_partial):
            assert generator.generate(tmp_path / "bad.mp4", "bad.mp4") is None

        assert not (tmp_path / "bad.jpg").exists()

    def test_no_frame_written_returns_none(self, tmp_path: Path):
        generator = ThumbnailGenerator(tmp_path)
        with patch(
            "lanplay.library.thumbnails.run_command", return_value=("", "", 0)
        ):
            assert generator.generate(tmp_path / "short.mp4", "short.mp4") is None

    def test_timeout_returns_none(self, tmp_path: Path):
        generator = ThumbnailGenerator(tmp_path, timeout=1)
        with patch(
            "lanplay.library.thumbnails.run_command",
            side_effect=subprocess.TimeoutExpired(cmd="ffmpeg", timeout=1),
        ):
            assert generator.generate(tmp_path / "slow.mp4", "slow.mp4") is None

    def test_missing_ffmpeg_returns_none(self, tmp_path: Path):
        generator = ThumbnailGenerator(tmp_path)
        with patch(
            "lanplay.library.thumbnails.run_command",
            side_effect=FileNotFoundError("ffmpeg"),
        ):
            assert generator.generate(tmp_path / "a.mp4", "a.mp4") is None

    def test_creates_thumbnails_dir(self, tmp_path: Path, fake_ffmpeg):
        thumbs = tmp_path / "nested" / "thumbnails"
        generator = ThumbnailGenerator(thumbs)

        generator.generate(tmp_path / "a.mp4", "a.mp4")

        assert (thumbs / "a.jpg").exists()

"""Tests for run_command."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from lanplay.core.subprocess_utils import run_command


class TestRunCommand:
    def test_returns_output_and_code(self):
        completed = MagicMock(stdout="out", stderr="err", returncode=0)
        with patch("subprocess.run", return_value=completed) as mock_run:
            assert run_command(["ffmpeg", Path("/a b.mp4")]) == ("out", "err", 0)

        args = mock_run.call_args.args[0]
        assert args == ["ffmpeg", "/a b.mp4"]
        assert mock_run.call_args.kwargs["timeout"] == 120

    def test_none_output_becomes_empty(self):
        completed = MagicMock(stdout=None, stderr=None, returncode=1)
        with patch("subprocess.run", return_value=completed):
            assert run_command(["ffmpeg"], timeout=None) == ("", "", 1)

    def test_timeout_is_reraised(self):
        with patch(
            "subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="ffmpeg", timeout=1),
        ):
            with pytest.raises(subprocess.TimeoutExpired):
                run_command(["ffmpeg", "-i", "a.mp4", "b.jpg"], timeout=1)

    def test_missing_executable_propagates(self):
        with patch("subprocess.run", side_effect=FileNotFoundError("ffmpeg")):
            with pytest.raises(FileNotFoundError):
                run_command(["ffmpeg"])

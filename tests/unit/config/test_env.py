"""Tests for EnvReader."""

from pathlib import Path

from lanplay.config.env import EnvReader


class TestEnvReader:
    def test_get_str(self):
        reader = EnvReader(env={"A": "x"})
        assert reader.get_str("A") == "x"
        assert reader.get_str("B", "d") == "d"

    def test_get_int_invalid_uses_default(self):
        reader = EnvReader(env={"A": "ten"})
        assert reader.get_int("A", 5) == 5

    def test_get_float(self):
        assert EnvReader(env={"A": "2.5"}).get_float("A") == 2.5

    def test_get_path_must_exist(self, tmp_path):
        reader = EnvReader(env={"A": str(tmp_path / "absent")})
        assert reader.get_path("A") is None
        assert reader.get_path("A", must_exist=False) == tmp_path / "absent"

    def test_get_path_expands_user(self):
        reader = EnvReader(env={"A": "~/media"})
        assert reader.get_path("A", must_exist=False) == Path.home() / "media"

    def test_get_list(self):
        reader = EnvReader(env={"A": "mp4, ,mkv,"})
        assert reader.get_list("A") == ["mp4", "mkv"]
        assert reader.get_list("B") is None

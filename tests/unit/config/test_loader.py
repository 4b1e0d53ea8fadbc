"""Tests for configuration loading and precedence."""

import os
from pathlib import Path

import pytest

from lanplay.config.builder import ConfigBuilder, ConfigSource, source_from_file
from lanplay.config.env import EnvReader
from lanplay.config.loader import (
    get_config,
    get_data_dir,
    get_default_config_path,
    load_config_file,
    validate_config,
)
from lanplay.config.logging_factory import build_logging_config
from lanplay.config.models import LanPlayConfig, LibraryConfig, LoggingConfig
from lanplay.config.toml_parser import TomlParseError, load_toml_file


@pytest.fixture
def config_file(data_dir: Path) -> Path:
    data_dir.mkdir(parents=True, exist_ok=True)
    path = data_dir / "config.toml"
    path.write_text(
        """
[library]
media_root = "/srv/media"
extensions = ["mp4", "MKV"]

[scan]
interval_seconds = 300
thumbnail_width = 640

[server]
port = 9000

[logging]
level = "debug"
""",
        encoding="utf-8",
    )
    return path


class TestPaths:
    def test_data_dir_from_env(self, data_dir):
        assert get_data_dir() == data_dir

    def test_default_data_dir(self, monkeypatch):
        monkeypatch.delenv("LANPLAY_DATA_DIR")
        assert get_data_dir() == Path.home() / ".lanplay"

    def test_config_path_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LANPLAY_CONFIG_PATH", str(tmp_path / "custom.toml"))
        assert get_default_config_path() == tmp_path / "custom.toml"


class TestLoadConfigFile:
    def test_missing_file_is_empty(self):
        assert load_config_file() == {}

    def test_reads_default_location(self, config_file):
        assert load_config_file()["server"]["port"] == 9000

    def test_reloads_after_edit(self, config_file):
        assert load_config_file()["server"]["port"] == 9000
        config_file.write_text("[server]\nport = 9100\n", encoding="utf-8")
        stat = config_file.stat()
        os.utime(config_file, (stat.st_atime, stat.st_mtime + 5))

        assert load_config_file()["server"]["port"] == 9100

    def test_invalid_toml_lenient(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("[server\n", encoding="utf-8")
        assert load_toml_file(path) == {}

    def test_invalid_toml_strict(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("[server\n", encoding="utf-8")
        with pytest.raises(TomlParseError):
            load_toml_file(path, strict=True)


class TestGetConfig:
    def test_defaults(self, data_dir):
        config = get_config()
        assert config.library.media_root is None
        assert config.scan.interval_seconds == 600
        assert config.server.port == 8080
        assert config.data_dir == data_dir

    def test_file_values(self, config_file):
        config = get_config()
        assert config.library.media_root == Path("/srv/media")
        assert config.library.extensions == (".mp4", ".mkv")
        assert config.scan.interval_seconds == 300
        assert config.scan.thumbnail_width == 640
        assert config.logging.level == "debug"

    def test_env_overrides_file(self, config_file):
        reader = EnvReader(
            env={"LANPLAY_SERVER_PORT": "9500", "LANPLAY_SCAN_INTERVAL": "120"}
        )
        config = get_config(env_reader=reader)
        assert config.server.port == 9500
        assert config.scan.interval_seconds == 120

    def test_cli_overrides_env(self, config_file, tmp_path):
        reader = EnvReader(env={"LANPLAY_MEDIA_ROOT": "/env/media"})
        config = get_config(
            env_reader=reader,
            media_root=tmp_path,
            server_port=9999,
        )
        assert config.library.media_root == tmp_path
        assert config.server.port == 9999

    def test_env_extensions(self):
        reader = EnvReader(env={"LANPLAY_EXTENSIONS": "mp4, mp3"})
        assert get_config(env_reader=reader).library.extensions == (".mp4", ".mp3")

    def test_invalid_value_raises(self):
        with pytest.raises(ValueError, match="interval_seconds"):
            get_config(scan_interval_seconds=0)


class TestConfigBuilder:
    def test_source_of(self):
        builder = ConfigBuilder()
        builder.apply(ConfigSource(server_port=9000), source_name="file")
        builder.apply(ConfigSource(server_bind="127.0.0.1"), source_name="cli")

        assert builder.source_of("server_port") == "file"
        assert builder.source_of("server_bind") == "cli"
        assert builder.source_of("media_root") == "default"

    def test_none_does_not_override(self):
        builder = ConfigBuilder()
        builder.apply(ConfigSource(server_port=9000))
        builder.apply(ConfigSource(server_port=None))

        assert builder.build().server.port == 9000

    def test_source_from_file_data_dir(self):
        source = source_from_file({"data_dir": "~/lanplay"})
        assert source.data_dir == Path.home() / "lanplay"


class TestValidateConfig:
    def test_unset_media_root(self):
        errors = validate_config(LanPlayConfig())
        assert len(errors) == 1
        assert "media_root is not set" in errors[0]

    def test_valid(self, media_root):
        config = LanPlayConfig(library=LibraryConfig(media_root=media_root))
        assert validate_config(config) == []

    def test_missing_ffmpeg(self, media_root, tmp_path):
        config = get_config(media_root=media_root, ffmpeg_path=tmp_path / "ffmpeg")
        errors = validate_config(config)
        assert errors == [f"ffmpeg path does not exist: {tmp_path / 'ffmpeg'}"]


class TestBuildLoggingConfig:
    def test_flags_override_config(self, tmp_path):
        base = LoggingConfig(level="info", format="text")
        result = build_logging_config(
            base, level="debug", log_file=tmp_path / "x.log", log_json=True
        )
        assert result.level == "debug"
        assert result.file == tmp_path / "x.log"
        assert result.format == "json"
        assert result.max_bytes == base.max_bytes

    def test_no_flags_keep_config(self):
        base = LoggingConfig(level="warning", format="json")
        result = build_logging_config(base)
        assert result.level == "warning"
        assert result.format == "json"

    def test_invalid_level_raises(self):
        with pytest.raises(ValueError, match="level"):
            build_logging_config(LoggingConfig(), level="verbose")

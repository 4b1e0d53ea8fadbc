"""Configuration management for LANPlay.

Configuration is loaded with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (LANPLAY_*)
3. Config file (~/.lanplay/config.toml)
4. Default values (lowest priority)
"""

from lanplay.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from lanplay.config.env import EnvReader
from lanplay.config.loader import (
    clear_config_cache,
    get_config,
    get_data_dir,
    get_default_config_path,
    load_config_file,
    validate_config,
)
from lanplay.config.logging_factory import (
    build_logging_config,
    configure_logging_from_cli,
)
from lanplay.config.models import (
    DEFAULT_EXTENSIONS,
    VIDEO_EXTENSIONS,
    LanPlayConfig,
    LibraryConfig,
    LoggingConfig,
    ScanConfig,
    ServerConfig,
    ToolPathsConfig,
)
from lanplay.config.toml_parser import TomlParseError, load_toml_file, parse_toml

__all__ = [
    # Models
    "DEFAULT_EXTENSIONS",
    "VIDEO_EXTENSIONS",
    "LanPlayConfig",
    "LibraryConfig",
    "LoggingConfig",
    "ScanConfig",
    "ServerConfig",
    "ToolPathsConfig",
    # Loader
    "clear_config_cache",
    "get_config",
    "get_data_dir",
    "get_default_config_path",
    "load_config_file",
    "validate_config",
    # Builder
    "EnvReader",
    "ConfigBuilder",
    "ConfigSource",
    "source_from_env",
    "source_from_file",
    "build_logging_config",
    "configure_logging_from_cli",
    "parse_toml",
    "load_toml_file",
    "TomlParseError",
]

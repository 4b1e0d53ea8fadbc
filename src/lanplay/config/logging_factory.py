"""Logging settings for a lanplay command run.

The ``[logging]`` section of config.toml (or its LANPLAY_LOG_* variables)
gives the defaults. The global ``--log-level``, ``--log-file`` and
``--log-json`` flags override them for one invocation.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from lanplay.config.models import LoggingConfig


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    log_file: Path | None = None,
    log_json: bool = False,
) -> LoggingConfig:
    """Apply the global logging flags to the configured settings.

    Args:
        base: Settings from the config file and environment.
        level: Value of --log-level, or None to keep the configured level.
        log_file: Value of --log-file, or None to keep the configured file.
        log_json: True if --log-json was given. Without it the configured
            format is kept, so a config file asking for JSON still gets it.

    Returns:
        A new LoggingConfig. Rotation settings always come from base.

    Raises:
        ValueError: If the resulting level or format is invalid.
    """
    return replace(
        base,
        level=level if level is not None else base.level,
        file=log_file if log_file is not None else base.file,
        format="json" if log_json else base.format,
    )


def configure_logging_from_cli(
    *,
    level: str | None = None,
    log_file: Path | None = None,
    log_json: bool = False,
    config_path: Path | None = None,
) -> LoggingConfig:
    """Load the logging settings, apply the CLI flags and install them.

    Returns:
        The settings logging was configured with.
    """
    from lanplay.config.loader import get_config
    from lanplay.logging import configure_logging

    config = get_config(config_path=config_path)
    logging_config = build_logging_config(
        config.logging, level=level, log_file=log_file, log_json=log_json
    )
    configure_logging(logging_config)
    return logging_config

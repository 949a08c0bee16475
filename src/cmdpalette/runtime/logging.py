"""Runtime logging bootstrap helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.config_schema import PaletteConfig
from ..util.log import Log, LogFormat, LogLevel


@dataclass(frozen=True)
class LogSettings:
    level: LogLevel
    format: LogFormat
    console: bool
    file: bool
    dev_file: bool


def resolve_log_settings(
    config: PaletteConfig,
    *,
    level: Optional[str] = None,
    console: Optional[bool] = None,
    file: Optional[bool] = None,
) -> LogSettings:
    """Merge explicit arguments over the config's logging section."""
    section = config.logging

    use_console = console if console is not None else bool(section.console)
    use_file = file if file is not None else bool(section.file)

    return LogSettings(
        level=LogLevel.parse(level or section.level),
        format=LogFormat.parse(section.format),
        console=use_console,
        file=use_file,
        dev_file=bool(section.dev_file),
    )


def bootstrap_logging(
    config: PaletteConfig,
    *,
    level: Optional[str] = None,
    console: Optional[bool] = None,
    file: Optional[bool] = None,
) -> LogSettings:
    """Resolve logging settings from config and initialize the process logger."""
    settings = resolve_log_settings(config, level=level, console=console, file=file)
    Log.configure(
        level=settings.level,
        format=settings.format,
        console=settings.console,
        file=settings.file,
        dev=settings.dev_file,
    )
    return settings

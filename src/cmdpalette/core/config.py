"""Configuration management.

Loads and merges palette configuration from multiple sources with proper precedence.
"""

import os
from contextvars import ContextVar, Token
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .config_loader import deep_merge, load_json_file
from .config_schema import GroupConfig, LoggingConfig, PaletteConfig
from .global_paths import GlobalPath
from ..errors import PaletteError
from ..util.log import Log

log = Log.create({"service": "config"})

__all__ = [
    "ConfigError",
    "ConfigManager",
    "GroupConfig",
    "LoggingConfig",
    "PaletteConfig",
]

CONFIG_FILENAMES = ("cmdpalette.json", "cmdpalette.jsonc")


class ConfigError(PaletteError):
    """Configuration error."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Config error in {path}: {message}")


def _env_bool(name: str, value: str) -> bool:
    text = value.strip().lower()
    if text in {"1", "true", "yes", "on"}:
        return True
    if text in {"0", "false", "no", "off"}:
        return False
    raise ConfigError(name, f"expected a boolean, got {value!r}")


def _env_overrides() -> Dict[str, Any]:
    """Collect ``CMDPALETTE_*`` overrides from the environment."""
    result: Dict[str, Any] = {}

    loop = os.environ.get("CMDPALETTE_LOOP")
    if loop is not None:
        result["loop"] = _env_bool("CMDPALETTE_LOOP", loop)

    depth = os.environ.get("CMDPALETTE_MAX_RAISE_DEPTH")
    if depth is not None:
        try:
            result["max_raise_depth"] = int(depth)
        except ValueError:
            raise ConfigError("CMDPALETTE_MAX_RAISE_DEPTH", f"expected an integer, got {depth!r}")

    level = os.environ.get("CMDPALETTE_LOG_LEVEL")
    if level:
        result["logging"] = {"level": level}

    return result


_config_var: ContextVar['ConfigManager'] = ContextVar('_config_var')


class ConfigManager:
    """Configuration management.

    Instance-based with ContextVar for scoping. Class methods delegate
    to the current instance.

    Loads configuration from multiple sources with proper precedence:
    1. Global config (``cmdpalette.json`` in the platform config dir)
    2. Project config (``cmdpalette.json`` found walking up from the directory)
    3. Environment variable overrides
    """

    def __init__(self) -> None:
        self._cache: Optional[PaletteConfig] = None
        self._sources: List[str] = []

    # -- ContextVar plumbing --

    @classmethod
    def current(cls) -> 'ConfigManager':
        try:
            return _config_var.get()
        except LookupError:
            instance = cls()
            _config_var.set(instance)
            return instance

    @classmethod
    def provide(cls, instance: 'ConfigManager') -> Token['ConfigManager']:
        return _config_var.set(instance)

    @classmethod
    def restore(cls, token: Token['ConfigManager']) -> None:
        _config_var.reset(token)

    # -- Public API --

    @classmethod
    def reset(cls) -> None:
        """Reset cached configuration."""
        inst = cls.current()
        inst._cache = None
        inst._sources = []

    @classmethod
    def load(cls, directory: str = ".") -> PaletteConfig:
        return cls.current()._load(directory)

    @classmethod
    def get(cls) -> PaletteConfig:
        inst = cls.current()
        if inst._cache is None:
            return inst._load()
        return inst._cache

    @classmethod
    def sources(cls) -> List[str]:
        """Files that contributed to the cached configuration, lowest precedence first."""
        return cls.current()._sources.copy()

    # -- Instance methods --

    def _load(self, directory: str = ".") -> PaletteConfig:
        if self._cache is not None:
            return self._cache

        timer = log.time("load config", {"directory": directory})
        result: Dict[str, Any] = {}
        sources: List[str] = []

        # 1. Global config
        global_dir = GlobalPath.config()
        for filename in CONFIG_FILENAMES:
            filepath = os.path.join(global_dir, filename)
            data = load_json_file(filepath)
            if data:
                result = deep_merge(result, data)
                sources.append(filepath)
                log.info("loaded global config", {"path": filepath})

        # 2. Project config (search up from directory)
        current = Path(directory).resolve()
        project_configs: List[str] = []
        while True:
            for filename in CONFIG_FILENAMES:
                filepath = current / filename
                if filepath.exists():
                    project_configs.append(str(filepath))
            if current == current.parent:
                break
            current = current.parent

        # Apply in reverse order (root first, then more specific)
        for filepath in reversed(project_configs):
            data = load_json_file(filepath)
            if data:
                result = deep_merge(result, data)
                sources.append(filepath)
                log.info("loaded project config", {"path": filepath})

        # 3. Environment overrides
        env = _env_overrides()
        if env:
            result = deep_merge(result, env)
            log.info("applied environment overrides", {"keys": sorted(env)})

        try:
            config = PaletteConfig.model_validate(result)
        except ValidationError as e:
            origin = sources[-1] if sources else "<defaults>"
            raise ConfigError(origin, str(e)) from e

        self._cache = config
        self._sources = sources
        timer.stop()
        return config

from collections.abc import Iterator
from pathlib import Path

import pytest

from cmdpalette.core.config import ConfigManager
from cmdpalette.util.log import Log

ENV_OVERRIDES = ("CMDPALETTE_LOOP", "CMDPALETTE_MAX_RAISE_DEPTH", "CMDPALETTE_LOG_LEVEL")


@pytest.fixture(autouse=True)
def config_context(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    monkeypatch.setenv("CMDPALETTE_CONFIG_DIR", str(tmp_path / "global"))
    for name in ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    token = ConfigManager.provide(ConfigManager())
    try:
        yield
    finally:
        ConfigManager.restore(token)


@pytest.fixture(autouse=True)
def _log_teardown() -> Iterator[None]:
    yield
    Log.reset()

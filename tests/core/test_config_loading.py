from __future__ import annotations

import json
from pathlib import Path

import pytest

from cmdpalette.core.config import ConfigError, ConfigManager, PaletteConfig
from cmdpalette.core.config_loader import deep_merge, load_json_file, substitute_env_vars
from cmdpalette.core.global_paths import GlobalPath
from cmdpalette.errors import PaletteError
from cmdpalette.runtime.logging import bootstrap_logging
from cmdpalette.util.error import format_error
from cmdpalette.util.log import Log, LogFormat, LogLevel


@pytest.fixture
def global_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    path = tmp_path / "global"
    path.mkdir()
    monkeypatch.setenv("CMDPALETTE_CONFIG_DIR", str(path))
    return path


def test_load_defaults_without_files(global_dir: Path, tmp_path: Path) -> None:
    project = tmp_path / "project"
    project.mkdir()

    config = ConfigManager.load(str(project))

    assert config.loop is True
    assert ConfigManager.sources() == []


def test_project_config_overrides_global(global_dir: Path, tmp_path: Path) -> None:
    (global_dir / "cmdpalette.json").write_text(
        json.dumps({"loop": False, "maxRaiseDepth": 7, "groups": [{"name": "nav", "items": ["a"]}]}),
        encoding="utf-8",
    )
    project = tmp_path / "project"
    nested = project / "sub"
    nested.mkdir(parents=True)
    (project / "cmdpalette.jsonc").write_text(
        '{\n  // project wins\n  "loop": true,\n  "groups": [{"name": "nav", "items": ["b"]}, {"name": "edit"}]\n}',
        encoding="utf-8",
    )

    config = ConfigManager.load(str(nested))

    assert config.loop is True
    assert config.max_raise_depth == 7
    assert [(g.name, g.items) for g in config.groups] == [("nav", ["b"]), ("edit", [])]
    assert ConfigManager.sources()[0] == str(global_dir / "cmdpalette.json")


def test_environment_overrides_files(global_dir: Path, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    (global_dir / "cmdpalette.json").write_text('{"loop": true}', encoding="utf-8")
    monkeypatch.setenv("CMDPALETTE_LOOP", "off")
    monkeypatch.setenv("CMDPALETTE_MAX_RAISE_DEPTH", "12")
    monkeypatch.setenv("CMDPALETTE_LOG_LEVEL", "debug")

    config = ConfigManager.load(str(tmp_path))

    assert config.loop is False
    assert config.max_raise_depth == 12
    assert config.logging.level == "debug"


def test_bad_environment_values_raise(global_dir: Path, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("CMDPALETTE_LOOP", "maybe")

    with pytest.raises(ConfigError, match="CMDPALETTE_LOOP"):
        ConfigManager.load(str(tmp_path))


def test_config_errors_are_palette_errors(global_dir: Path, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("CMDPALETTE_MAX_RAISE_DEPTH", "many")

    with pytest.raises(PaletteError) as excinfo:
        ConfigManager.load(str(tmp_path))

    assert isinstance(excinfo.value, ConfigError)
    assert format_error(excinfo.value) == str(excinfo.value)


def test_invalid_merged_config_raises(global_dir: Path, tmp_path: Path) -> None:
    (global_dir / "cmdpalette.json").write_text('{"loop": true, "speed": 3}', encoding="utf-8")

    with pytest.raises(ConfigError) as excinfo:
        ConfigManager.load(str(tmp_path))

    assert excinfo.value.path == str(global_dir / "cmdpalette.json")


def test_load_is_cached_until_reset(global_dir: Path, tmp_path: Path) -> None:
    first = ConfigManager.load(str(tmp_path))
    (global_dir / "cmdpalette.json").write_text('{"loop": false}', encoding="utf-8")

    assert ConfigManager.get() is first

    ConfigManager.reset()
    assert ConfigManager.load(str(tmp_path)).loop is False


def test_load_json_file_substitutes_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PALETTE_TEST_LOOP", "false")
    path = tmp_path / "c.json"
    path.write_text('{"loop": {env:PALETTE_TEST_LOOP}}', encoding="utf-8")

    assert load_json_file(str(path)) == {"loop": False}
    assert load_json_file(str(tmp_path / "missing.json")) == {}


def test_substitute_env_vars_missing_is_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PALETTE_TEST_MISSING", raising=False)

    assert substitute_env_vars('"{env:PALETTE_TEST_MISSING}"') == '""'


def test_deep_merge_nested_dicts() -> None:
    merged = deep_merge({"logging": {"level": "info", "console": True}}, {"logging": {"level": "debug"}})

    assert merged == {"logging": {"level": "debug", "console": True}}


def test_bootstrap_logging_applies_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys) -> None:  # type: ignore[no-untyped-def]
    monkeypatch.setattr(GlobalPath, "log", classmethod(lambda cls: str(tmp_path)))
    config = PaletteConfig.model_validate({"logging": {"level": "warn", "format": "json", "console": True}})

    settings = bootstrap_logging(config)
    Log.create({"service": "test.bootstrap"}).warn("configured")

    assert settings.level is LogLevel.WARN
    assert settings.format is LogFormat.JSON
    assert settings.file is False
    assert json.loads(capsys.readouterr().err)["msg"] == "configured"

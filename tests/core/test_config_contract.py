import pytest
from pydantic import ValidationError

from cmdpalette.core.config import PaletteConfig


def test_config_defaults_are_typed_models() -> None:
    config = PaletteConfig.model_validate({})

    assert config.loop is True
    assert config.max_raise_depth == 50
    assert config.groups == []
    assert config.logging.level is None
    assert config.logging.format is None


def test_config_accepts_camel_case_aliases() -> None:
    config = PaletteConfig.model_validate({"maxRaiseDepth": 5, "logging": {"devFile": True}})

    assert config.max_raise_depth == 5
    assert config.logging.dev_file is True


def test_config_forbids_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        PaletteConfig.model_validate({"unknown": 1})

    with pytest.raises(ValidationError):
        PaletteConfig.model_validate({"logging": {"unknown": True}})

    with pytest.raises(ValidationError):
        PaletteConfig.model_validate({"groups": [{"name": "a", "items": [], "color": "red"}]})


def test_config_validates_values() -> None:
    with pytest.raises(ValidationError):
        PaletteConfig.model_validate({"max_raise_depth": 0})

    with pytest.raises(ValidationError):
        PaletteConfig.model_validate({"groups": [{"name": " "}]})

    with pytest.raises(ValidationError):
        PaletteConfig.model_validate({"groups": [{"name": "a"}, {"name": "a"}]})

    with pytest.raises(ValidationError):
        PaletteConfig.model_validate({"logging": {"format": "xml"}})

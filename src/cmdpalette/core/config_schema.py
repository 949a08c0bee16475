"""Configuration schema: Pydantic models for cmdpalette config files."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GroupConfig(BaseModel):
    """Named group of item values used for alt+arrow group jumps."""
    name: str
    items: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("group name must not be empty")
        return value


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: Optional[str] = None
    format: Optional[Literal["kv", "json", "pretty"]] = None
    console: Optional[bool] = None
    file: Optional[bool] = None
    dev_file: Optional[bool] = Field(None, alias="devFile")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class PaletteConfig(BaseModel):
    """Top-level palette configuration."""
    loop: bool = True
    max_raise_depth: int = Field(50, ge=1, alias="maxRaiseDepth")
    groups: List[GroupConfig] = Field(default_factory=list)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @field_validator("groups")
    @classmethod
    def _unique_group_names(cls, value: List[GroupConfig]) -> List[GroupConfig]:
        seen: set[str] = set()
        for group in value:
            if group.name in seen:
                raise ValueError(f"duplicate group name: {group.name}")
            seen.add(group.name)
        return value

"""Data model for the palette: items, groups and the machine context."""

from __future__ import annotations

from typing import Callable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

Scorer = Callable[[str, str], float]


class Item(BaseModel):
    """A selectable candidate. ``value`` is both its identity and its label."""
    value: str
    disabled: bool = False

    model_config = ConfigDict(frozen=True)

    def as_item(self) -> "Item":
        """Plain ``Item`` snapshot, dropping any subclass fields."""
        return Item(value=self.value, disabled=self.disabled)


class ScoredItem(Item):
    """Item with its match score against the current search."""
    score: float


class Group(BaseModel):
    """Named set of item values used for group jumps.

    Membership is by value and does not depend on the live item list.
    """
    name: str
    items: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)


class CommandContext(BaseModel):
    """Everything the palette knows between two events.

    Attributes:
        items: Full candidate list in caller order
        search: Current query text
        selected: Value of the selected item, None when nothing is visible
        loop: Whether next/prev wrap around at the edges
        all_groups: Static group metadata for group jumps
        list_id: Id of the rendered list element
        input_id: Id of the rendered input element
        label_id: Id of the rendered label element
        scorer: Match scorer; None uses the default command scorer
    """
    items: Tuple[Item, ...] = ()
    search: str = ""
    selected: Optional[str] = None
    loop: bool = True
    all_groups: Tuple[Group, ...] = ()
    list_id: str = ""
    input_id: str = ""
    label_id: str = ""
    scorer: Optional[Scorer] = Field(default=None, exclude=True, repr=False)

    model_config = ConfigDict(frozen=True)

"""Read-only views over a ``CommandContext`` for the rendering layer.

All functions are pure. Boolean ARIA attributes are omitted when false
so renderers can splat the dicts directly.
"""

from __future__ import annotations

from typing import Dict, Optional, Union

from .filtering import index_of, visible_items
from .types import CommandContext, Item, ScoredItem

__all__ = [
    "input_attributes",
    "item_attributes",
    "list_attributes",
    "option_id",
    "selected_index",
    "selected_item",
    "visible_items",
]

Attributes = Dict[str, Union[str, bool]]


def selected_item(ctx: CommandContext) -> Optional[ScoredItem]:
    """The selected item if it is visible, else None."""
    items = visible_items(ctx)
    i = index_of(items, ctx.selected)
    return items[i] if i is not None else None


def selected_index(ctx: CommandContext) -> Optional[int]:
    """Display position of the selection in the visible list."""
    return index_of(visible_items(ctx), ctx.selected)


def option_id(ctx: CommandContext, value: str) -> str:
    """Stable element id for the option rendering ``value``."""
    for i, item in enumerate(ctx.items):
        if item.value == value:
            return f"{ctx.list_id}-option-{i}"
    return f"{ctx.list_id}-option"


def input_attributes(ctx: CommandContext) -> Attributes:
    attrs: Attributes = {
        "role": "combobox",
        "autocomplete": "off",
        "aria-autocomplete": "list",
        "aria-controls": ctx.list_id,
        "aria-labelledby": ctx.label_id,
    }
    item = selected_item(ctx)
    if item is not None:
        attrs["aria-activedescendant"] = option_id(ctx, item.value)
    return attrs


def list_attributes(ctx: CommandContext) -> Attributes:
    return {
        "role": "listbox",
        "aria-label": "Suggestions",
        "aria-labelledby": ctx.input_id,
    }


def item_attributes(item: Item, ctx: CommandContext) -> Attributes:
    """Option attributes; ``aria-selected`` only for the visible selection."""
    attrs: Attributes = {
        "id": option_id(ctx, item.value),
        "role": "option",
    }
    if not item.disabled and ctx.selected == item.value and selected_item(ctx) is not None:
        attrs["aria-selected"] = True
    if item.disabled:
        attrs["aria-disabled"] = True
    return attrs

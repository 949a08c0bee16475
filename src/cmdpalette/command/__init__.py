"""Selection, filtering and keyboard navigation engine for command palettes."""

from .accessors import (
    input_attributes,
    item_attributes,
    list_attributes,
    option_id,
    selected_index,
    selected_item,
    visible_items,
)
from .capture import (
    Assign,
    Capture,
    ComposedHandler,
    EffectQueue,
    Exec,
    Raise,
    capture,
    run_effects,
)
from .events import (
    ChangeEvent,
    ItemsUpdateEvent,
    JumpToLastEvent,
    JumpToStartEvent,
    KeydownEvent,
    NextEvent,
    PrevEvent,
    SearchEvent,
    SelectIndexEvent,
    parse_event,
)
from .groups import DEMO_GROUPS, GroupIndex
from .keyboard import KeyCommand, KeyEvent, interpret_key
from .machine import CommandMachine, create
from .scoring import command_score, score
from .types import CommandContext, Group, Item, ScoredItem

__all__ = [
    "Assign",
    "Capture",
    "ChangeEvent",
    "CommandContext",
    "CommandMachine",
    "ComposedHandler",
    "DEMO_GROUPS",
    "EffectQueue",
    "Exec",
    "Group",
    "GroupIndex",
    "Item",
    "ItemsUpdateEvent",
    "JumpToLastEvent",
    "JumpToStartEvent",
    "KeyCommand",
    "KeyEvent",
    "KeydownEvent",
    "NextEvent",
    "PrevEvent",
    "Raise",
    "ScoredItem",
    "SearchEvent",
    "SelectIndexEvent",
    "capture",
    "command_score",
    "create",
    "input_attributes",
    "interpret_key",
    "item_attributes",
    "list_attributes",
    "option_id",
    "parse_event",
    "run_effects",
    "score",
    "selected_index",
    "selected_item",
    "visible_items",
]

"""Events accepted by the palette machine.

Each event is a frozen pydantic model discriminated on ``type``. Plain
dicts of the same shape are accepted by ``parse_event``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .keyboard import KeyEvent
from .types import Item
from ..errors import InvalidEventError


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="forbid")


class NextEvent(_Event):
    """Move the selection forward; ``key_event`` carries the modifiers."""
    type: Literal["next"] = "next"
    key_event: Optional[KeyEvent] = None


class PrevEvent(_Event):
    """Move the selection backward; ``key_event`` carries the modifiers."""
    type: Literal["prev"] = "prev"
    key_event: Optional[KeyEvent] = None


class JumpToStartEvent(_Event):
    type: Literal["jump-to-start"] = "jump-to-start"


class JumpToLastEvent(_Event):
    type: Literal["jump-to-last"] = "jump-to-last"


class SelectIndexEvent(_Event):
    """Select the visible item at ``index``."""
    type: Literal["select-index"] = "select-index"
    index: int


class SearchEvent(_Event):
    type: Literal["search"] = "search"
    value: str


class ItemsUpdateEvent(_Event):
    """Replace the candidate list wholesale."""
    type: Literal["items.update"] = "items.update"
    items: Tuple[Item, ...]


class ChangeEvent(_Event):
    """Explicit selection of one item, e.g. a click or a confirmed key."""
    type: Literal["change"] = "change"
    item: Item


class KeydownEvent(_Event):
    type: Literal["keydown"] = "keydown"
    key_event: KeyEvent


PaletteEvent = Annotated[
    Union[
        NextEvent,
        PrevEvent,
        JumpToStartEvent,
        JumpToLastEvent,
        SelectIndexEvent,
        SearchEvent,
        ItemsUpdateEvent,
        ChangeEvent,
        KeydownEvent,
    ],
    Field(discriminator="type"),
]

EVENT_TYPES = (
    NextEvent,
    PrevEvent,
    JumpToStartEvent,
    JumpToLastEvent,
    SelectIndexEvent,
    SearchEvent,
    ItemsUpdateEvent,
    ChangeEvent,
    KeydownEvent,
)

_adapter: TypeAdapter[Any] = TypeAdapter(PaletteEvent)


def parse_event(event: Any) -> Any:
    """Validate ``event`` into one of the event models.

    Raises:
        InvalidEventError: The event has an unknown type or a bad payload
    """
    if isinstance(event, EVENT_TYPES):
        return event
    if isinstance(event, KeyEvent):
        return KeydownEvent(key_event=event)
    if not isinstance(event, dict):
        raise InvalidEventError(event, f"expected an event model or dict, got {type(event).__name__}")
    try:
        return _adapter.validate_python(event)
    except ValidationError as e:
        raise InvalidEventError(event, str(e)) from e

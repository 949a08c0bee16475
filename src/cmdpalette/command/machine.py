"""Selection state machine for the command palette.

The machine has a single ``ready`` state; everything else lives in a
``CommandContext``. Every event maps to a composed handler (see
``capture``) whose effects are applied as one batch, after which any
raised events are processed in FIFO order before ``send`` returns.

Selection is tracked by value, so it keeps pointing at the same item when
a new search reorders the visible list.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Callable, Deque, Dict, Iterable, List, Optional, Sequence

from .accessors import selected_item
from .capture import ComposedHandler, EffectQueue, capture, run_effects
from .events import (
    ChangeEvent,
    JumpToLastEvent,
    JumpToStartEvent,
    NextEvent,
    PrevEvent,
    SelectIndexEvent,
    parse_event,
)
from .filtering import index_of, visible_items
from .groups import adjacent_group_item
from .keyboard import KeyCommand, interpret_key
from .types import CommandContext, Group, Item, Scorer
from ..core.config import ConfigManager
from ..core.config_schema import PaletteConfig
from ..errors import MachineStoppedError, RaiseDepthError
from ..util.log import Log

log = Log.create({"service": "palette.machine"})

OnChange = Callable[[Item], None]
Listener = Callable[[CommandContext, Any], None]

DEFAULT_MAX_RAISE_DEPTH = 50


# -- composed handlers --

def update_selected_to_index(index: int) -> ComposedHandler:
    """Select the visible item at ``index``; out of range is a no-op."""

    def handler(ctx: CommandContext, event: Any, fx: EffectQueue) -> None:
        items = visible_items(ctx)
        if 0 <= index < len(items):
            fx.assign(selected=items[index].value)

    return ComposedHandler(handler, name=f"update_selected_to_index({index})")


def update_selected_by_change(step: int) -> ComposedHandler:
    """Move the selection ``step`` positions within the visible list."""

    def handler(ctx: CommandContext, event: Any, fx: EffectQueue) -> None:
        items = visible_items(ctx)
        if not items:
            return

        if ctx.selected is None:
            target = 0 if step > 0 else len(items) - 1
        else:
            current = index_of(items, ctx.selected)
            if current is None:
                return
            target = current + step
            if not 0 <= target < len(items):
                if not ctx.loop:
                    return
                target %= len(items)

        fx.assign(selected=items[target].value)

    return ComposedHandler(handler, name=f"update_selected_by_change({step})")


def update_selected_to_group(step: int) -> ComposedHandler:
    """Jump to the nearest group in direction ``step``, else move one item."""

    def handler(ctx: CommandContext, event: Any, fx: EffectQueue) -> None:
        target = adjacent_group_item(ctx.all_groups, ctx.selected, visible_items(ctx), step)
        if target is None:
            fx.capture(update_selected_by_change(step))
        else:
            fx.assign(selected=target)

    return ComposedHandler(handler, name=f"update_selected_to_group({step})")


first = update_selected_to_index(0)


@capture
def last(ctx: CommandContext, event: Any, fx: EffectQueue) -> None:
    fx.capture(update_selected_to_index(len(visible_items(ctx)) - 1))


@capture
def reset_selection(ctx: CommandContext, event: Any, fx: EffectQueue) -> None:
    items = visible_items(ctx)
    fx.assign(selected=items[0].value if items else None)


def _prevent_default(ctx: CommandContext, event: Any) -> None:
    event.key_event.prevent_default()


def _step(step: int) -> ComposedHandler:
    def handler(ctx: CommandContext, event: Any, fx: EffectQueue) -> None:
        key_event = event.key_event
        if key_event is None:
            fx.capture(update_selected_by_change(step))
            return

        fx.exec(_prevent_default)
        if key_event.meta:
            fx.capture(last if step > 0 else first)
        elif key_event.alt:
            fx.capture(update_selected_to_group(step))
        else:
            fx.capture(update_selected_by_change(step))

    return ComposedHandler(handler, name="next" if step > 0 else "prev")


@capture
def jump_to_start(ctx: CommandContext, event: JumpToStartEvent, fx: EffectQueue) -> None:
    fx.capture(first)


@capture
def jump_to_last(ctx: CommandContext, event: JumpToLastEvent, fx: EffectQueue) -> None:
    count = len(visible_items(ctx))
    if count:
        fx.raise_(SelectIndexEvent(index=count - 1))


@capture
def select_index(ctx: CommandContext, event: SelectIndexEvent, fx: EffectQueue) -> None:
    fx.capture(update_selected_to_index(event.index))


@capture
def search(ctx: CommandContext, event: Any, fx: EffectQueue) -> None:
    fx.assign(search=event.value)
    fx.capture(reset_selection)


@capture
def items_update(ctx: CommandContext, event: Any, fx: EffectQueue) -> None:
    fx.assign(items=event.items, search="")
    fx.capture(reset_selection)


@capture
def change(ctx: CommandContext, event: ChangeEvent, fx: EffectQueue) -> None:
    if index_of(visible_items(ctx), event.item.value) is None:
        return
    fx.assign(selected=event.item.value)
    fx.exec("on_change")


@capture
def keydown(ctx: CommandContext, event: Any, fx: EffectQueue) -> None:
    key_event = event.key_event
    command = interpret_key(key_event)
    if command is None:
        return

    if command.prevents_default:
        fx.exec(_prevent_default)

    if command is KeyCommand.NEXT:
        fx.raise_(NextEvent(key_event=key_event))
    elif command is KeyCommand.PREV:
        fx.raise_(PrevEvent(key_event=key_event))
    elif command is KeyCommand.JUMP_TO_START:
        fx.raise_(JumpToStartEvent())
    elif command is KeyCommand.JUMP_TO_LAST:
        fx.raise_(JumpToLastEvent())
    elif command is KeyCommand.CONFIRM:
        item = selected_item(ctx)
        if item is not None:
            fx.raise_(ChangeEvent(item=item.as_item()))


TRANSITIONS: Dict[str, ComposedHandler] = {
    "next": _step(1),
    "prev": _step(-1),
    "jump-to-start": jump_to_start,
    "jump-to-last": jump_to_last,
    "select-index": select_index,
    "search": search,
    "items.update": items_update,
    "change": change,
    "keydown": keydown,
}


# -- interpreter --

class CommandMachine:
    """Runs palette events against a context.

    ``send`` is synchronous. Events sent from inside a callback while a
    dispatch is running are queued and handled before the outer ``send``
    returns.
    """

    state = "ready"

    def __init__(
        self,
        context: CommandContext,
        on_change: Optional[OnChange] = None,
        *,
        max_raise_depth: int = DEFAULT_MAX_RAISE_DEPTH,
    ) -> None:
        self._context = context
        self._on_change = on_change
        self._max_raise_depth = max_raise_depth
        self._listeners: List[Listener] = []
        self._mailbox: Deque[Any] = deque()
        self._processing = False
        self._stopped = False
        self._actions = {"on_change": self._notify_change}

    @property
    def context(self) -> CommandContext:
        return self._context

    @property
    def stopped(self) -> bool:
        return self._stopped

    def send(self, event: Any) -> CommandContext:
        """Dispatch ``event`` (model, dict or bare ``KeyEvent``) and return the new context.

        Raises:
            InvalidEventError: The event is malformed
            MachineStoppedError: The machine was stopped
            RaiseDepthError: Handlers kept raising events past the bound
        """
        if self._stopped:
            raise MachineStoppedError()

        self._mailbox.append(parse_event(event))
        if self._processing:
            return self._context

        self._processing = True
        try:
            while self._mailbox:
                self._dispatch(self._mailbox.popleft())
        finally:
            self._processing = False
            self._mailbox.clear()
        return self._context

    def _dispatch(self, event: Any) -> None:
        queue: Deque[Any] = deque([event])
        raised = 0
        while queue:
            current = queue.popleft()
            handler = TRANSITIONS[current.type]
            result = run_effects(handler, self._context, current, actions=self._actions)
            self._context = result.context
            log.debug("transition", {
                "event": current.type,
                "selected": self._context.selected,
                "search": self._context.search,
                "effects": result.applied,
            })
            self._emit(current)

            for next_event in result.raised:
                raised += 1
                if raised > self._max_raise_depth:
                    log.error("raise depth exceeded", {
                        "event": event.type,
                        "limit": self._max_raise_depth,
                    })
                    raise RaiseDepthError(self._max_raise_depth, event.type)
                queue.append(parse_event(next_event))

    def _notify_change(self, ctx: CommandContext, event: ChangeEvent) -> None:
        if self._on_change is not None:
            self._on_change(event.item)

    def _emit(self, event: Any) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._context, event)
            except Exception as e:
                log.error("transition listener failed", {"event": event.type, "error": e})

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(context, event)`` after every committed event.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def stop(self) -> None:
        """Refuse further events and drop listeners."""
        self._stopped = True
        self._listeners.clear()


def create(
    items: Iterable[Any],
    list_id: str,
    input_id: str,
    label_id: str,
    on_change: Optional[OnChange] = None,
    *,
    groups: Optional[Sequence[Any]] = None,
    loop: Optional[bool] = None,
    scorer: Optional[Scorer] = None,
    config: Optional[PaletteConfig] = None,
) -> CommandMachine:
    """Build a palette machine with the first visible item selected.

    Args:
        items: Candidates as ``Item`` models or dicts
        list_id: Id of the rendered list
        input_id: Id of the rendered input
        label_id: Id of the rendered label
        on_change: Called with the chosen item on click or Enter
        groups: Group metadata; defaults to ``config.groups``
        loop: Wrap at the edges; defaults to ``config.loop``
        scorer: Match scorer; defaults to ``command_score``
        config: Palette configuration; defaults to ``ConfigManager.get()``
    """
    if config is None:
        config = ConfigManager.get()
    if groups is None:
        groups = [Group(name=g.name, items=tuple(g.items)) for g in config.groups]

    ctx = CommandContext(
        items=tuple(items),
        search="",
        loop=config.loop if loop is None else loop,
        all_groups=tuple(groups),
        list_id=list_id,
        input_id=input_id,
        label_id=label_id,
        scorer=scorer,
    )
    visible = visible_items(ctx)
    if visible:
        ctx = ctx.model_copy(update={"selected": visible[0].value})

    log.debug("created", {"items": len(ctx.items), "groups": len(ctx.all_groups), "loop": ctx.loop})
    return CommandMachine(ctx, on_change, max_raise_depth=config.max_raise_depth)

"""Composable transition handlers.

A handler written with ``capture`` receives ``(context, event, effects)``
and only *records* what should happen through ``effects``:

    @capture
    def on_search(ctx, event, fx):
        fx.assign(search=event.value)
        fx.capture(reset_selection)

Nothing is applied while the handler runs. ``run_effects`` then walks the
recorded list in order, merging assigns into a working copy of the
context, collecting raised events, running exec callbacks and expanding
nested captures in place. Nested handlers are expanded when reached, so
they see every assign queued before them. The caller commits the
returned context only if the whole walk succeeds.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ValidationError

from ..errors import CaptureDepthError, InvalidPatchError, UnknownActionError

MAX_CAPTURE_DEPTH = 50

PatchValue = Union[Any, Callable[[Any, Any], Any]]
Patch = Union[Mapping[str, PatchValue], Callable[[Any, Any], Mapping[str, Any]]]
ExecFn = Callable[[Any, Any], None]


@dataclass(frozen=True)
class Assign:
    """Merge ``patch`` into the context."""
    patch: Patch


@dataclass(frozen=True)
class Raise:
    """Emit ``event`` after the current batch commits."""
    event: Any


@dataclass(frozen=True)
class Exec:
    """Run a side effect, or a machine action when ``fn`` is a name."""
    fn: Union[ExecFn, str]


@dataclass(frozen=True)
class Capture:
    """Expand another composed handler at this position."""
    handler: "ComposedHandler"


Effect = Union[Assign, Raise, Exec, Capture]


class EffectQueue:
    """Recorder handed to composed handlers."""

    def __init__(self) -> None:
        self._effects: List[Effect] = []

    def assign(self, patch: Optional[Patch] = None, **fields: PatchValue) -> None:
        """Queue a context merge.

        Values may be literals or ``fn(context, event)``. A callable
        ``patch`` is called the same way and must return a mapping.
        """
        if patch is not None and fields:
            raise TypeError("assign() takes a patch or keyword fields, not both")
        self._effects.append(Assign(patch if patch is not None else dict(fields)))

    def raise_(self, event: Any) -> None:
        """Queue an internal event."""
        self._effects.append(Raise(event))

    def exec(self, fn: Union[ExecFn, str]) -> None:
        self._effects.append(Exec(fn))

    def capture(self, handler: "ComposedHandler") -> None:
        """Queue a nested handler, expanded in place."""
        if not isinstance(handler, ComposedHandler):
            raise TypeError(f"capture() expects a composed handler, got {type(handler).__name__}")
        self._effects.append(Capture(handler))

    @property
    def effects(self) -> Tuple[Effect, ...]:
        return tuple(self._effects)


class ComposedHandler:
    """A handler function plus the name it is reported under."""

    def __init__(self, fn: Callable[[Any, Any, EffectQueue], None], name: Optional[str] = None):
        self._fn = fn
        self.name = name or getattr(fn, "__name__", "handler")

    def plan(self, context: Any, event: Any) -> Tuple[Effect, ...]:
        """Run the handler and return the effects it recorded."""
        queue = EffectQueue()
        self._fn(context, event, queue)
        return queue.effects

    def __repr__(self) -> str:
        return f"ComposedHandler({self.name})"


def capture(fn: Callable[[Any, Any, EffectQueue], None]) -> ComposedHandler:
    """Wrap ``fn(context, event, effects)`` as a composed handler."""
    return ComposedHandler(fn)


@dataclass
class BatchResult:
    """Outcome of applying one handler's effects."""
    context: Any
    raised: List[Any] = field(default_factory=list)
    applied: int = 0


def apply_patch(context: BaseModel, patch: Patch, event: Any) -> BaseModel:
    """Return a validated copy of ``context`` with ``patch`` merged in."""
    values = patch(context, event) if callable(patch) else patch
    unknown = [name for name in values if name not in type(context).model_fields]
    if unknown:
        raise InvalidPatchError(unknown)

    update: Dict[str, Any] = {}
    for name, value in values.items():
        update[name] = value(context, event) if callable(value) else value
    if not update:
        return context

    data = {name: getattr(context, name) for name in type(context).model_fields}
    data.update(update)
    try:
        return type(context).model_validate(data)
    except ValidationError as e:
        errors = e.errors()
        fields = sorted({str(err["loc"][0]) for err in errors if err["loc"]} or update)
        detail = "; ".join(err["msg"] for err in errors)
        raise InvalidPatchError(fields, detail) from e


def run_effects(
    handler: ComposedHandler,
    context: Any,
    event: Any,
    *,
    actions: Optional[Mapping[str, ExecFn]] = None,
    max_depth: int = MAX_CAPTURE_DEPTH,
) -> BatchResult:
    """Plan ``handler`` and apply its effects in order onto a working context.

    Exceptions from the handler, nested handlers or exec callbacks
    propagate; the input ``context`` is never modified.
    """
    actions = actions or {}
    result = BatchResult(context=context)
    pending: Deque[Tuple[Effect, int]] = deque(
        (effect, 1) for effect in handler.plan(context, event)
    )

    while pending:
        effect, depth = pending.popleft()
        result.applied += 1

        if isinstance(effect, Assign):
            result.context = apply_patch(result.context, effect.patch, event)
        elif isinstance(effect, Raise):
            result.raised.append(effect.event)
        elif isinstance(effect, Exec):
            fn = effect.fn
            if isinstance(fn, str):
                if fn not in actions:
                    raise UnknownActionError(fn)
                fn = actions[fn]
            fn(result.context, event)
        elif isinstance(effect, Capture):
            if depth >= max_depth:
                raise CaptureDepthError(max_depth, effect.handler.name)
            nested = effect.handler.plan(result.context, event)
            pending.extendleft((e, depth + 1) for e in reversed(nested))
        else:
            raise TypeError(f"unknown effect {effect!r}")

    return result

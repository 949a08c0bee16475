"""Exceptions raised by the palette engine.

Everything here is a programming error: the engine never raises for
ordinary navigation on empty lists or stale selections.
"""

from __future__ import annotations


class PaletteError(Exception):
    """Base class for palette engine errors."""


class InvalidEventError(PaletteError):
    """Raised when an event passed to ``send`` does not match any known event shape."""

    def __init__(self, event: object, detail: str):
        self.event = event
        self.detail = detail
        super().__init__(f"invalid event {event!r}: {detail}")


class RaiseDepthError(PaletteError):
    """Raised when one dispatch keeps raising internal events past the allowed bound."""

    def __init__(self, limit: int, event_type: str):
        self.limit = limit
        self.event_type = event_type
        super().__init__(
            f"more than {limit} internal events raised while handling '{event_type}'"
        )


class CaptureDepthError(PaletteError):
    """Raised when composed handlers nest deeper than the allowed bound."""

    def __init__(self, limit: int, handler: str):
        self.limit = limit
        self.handler = handler
        super().__init__(f"capture nesting exceeded {limit} levels at '{handler}'")


class InvalidPatchError(PaletteError):
    """Raised when an assign effect targets an unknown field or assigns an invalid value."""

    def __init__(self, fields: list[str], detail: str | None = None):
        self.fields = fields
        self.detail = detail
        names = ', '.join(sorted(fields))
        if detail is None:
            super().__init__(f"unknown context field(s): {names}")
        else:
            super().__init__(f"invalid value for context field(s) {names}: {detail}")


class UnknownActionError(PaletteError):
    """Raised when an exec effect names an action the machine does not provide."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"action '{name}' is not provided by the machine")


class MachineStoppedError(PaletteError):
    """Raised when sending to a machine after ``stop()``."""

    def __init__(self) -> None:
        super().__init__("machine has been stopped")

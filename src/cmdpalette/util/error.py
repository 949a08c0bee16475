"""Error formatting utilities.

Turns engine errors into one-line messages and anything else into a
readable dump.
"""

import json
import traceback
from typing import Any

from ..errors import (
    CaptureDepthError,
    InvalidEventError,
    InvalidPatchError,
    MachineStoppedError,
    PaletteError,
    RaiseDepthError,
    UnknownActionError,
)


def format_error(error: Any) -> str | None:
    """Format known palette errors into user-friendly messages.

    Returns None if the error type is not recognized, allowing
    fallback to format_unknown_error.
    """
    if isinstance(error, InvalidEventError):
        return f"Palette received a malformed event: {error.detail}"
    if isinstance(error, RaiseDepthError):
        return (
            f"Palette stopped after {error.limit} chained events while handling "
            f"\"{error.event_type}\". A transition is raising events in a cycle."
        )
    if isinstance(error, CaptureDepthError):
        return f"Palette handler \"{error.handler}\" nests captures more than {error.limit} levels deep."
    if isinstance(error, InvalidPatchError):
        names = ', '.join(sorted(error.fields))
        if error.detail:
            return f"Palette handler assigned an invalid value to {names}: {error.detail}"
        return f"Palette handler assigned unknown field(s): {names}"
    if isinstance(error, UnknownActionError):
        return f"Palette action \"{error.name}\" is not configured."
    if isinstance(error, MachineStoppedError):
        return "Palette is no longer running."
    if isinstance(error, PaletteError):
        return str(error)
    return None


def format_unknown_error(error: Any) -> str:
    """Format any error into a string representation.

    Handles Exception objects, serializable objects, and primitives.
    """
    if isinstance(error, Exception):
        if error.__traceback__:
            return ''.join(traceback.format_exception(type(error), error, error.__traceback__))
        return f"{error.__class__.__name__}: {error}"

    if isinstance(error, (dict, list)):
        try:
            return json.dumps(error, indent=2)
        except (TypeError, ValueError):
            return "Unexpected error (unserializable)"

    return str(error)

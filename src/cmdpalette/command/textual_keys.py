"""Adapter from textual key events to palette ``KeyEvent``s."""

from __future__ import annotations

from textual import events

from .keyboard import KeyEvent

# textual key names -> DOM style names used by the interpreter
KEY_NAMES = {
    "up": "ArrowUp",
    "down": "ArrowDown",
    "left": "ArrowLeft",
    "right": "ArrowRight",
    "home": "Home",
    "end": "End",
    "enter": "Enter",
    "escape": "Escape",
    "tab": "Tab",
    "pageup": "PageUp",
    "pagedown": "PageDown",
}

META_MODIFIERS = frozenset({"meta", "super", "cmd"})


def key_event_from_textual(event: events.Key) -> KeyEvent:
    """Build a ``KeyEvent`` from a textual ``Key`` event.

    ``prevent_default`` on the result also prevents the textual event's
    default handling.
    """
    *modifiers, name = event.key.split("+")
    mods = set(modifiers)
    return KeyEvent(
        KEY_NAMES.get(name, name),
        ctrl="ctrl" in mods,
        alt="alt" in mods,
        meta=bool(mods & META_MODIFIERS),
        default_prevented=bool(getattr(event, "_no_default_action", False)),
        on_prevent=event.prevent_default,
    )

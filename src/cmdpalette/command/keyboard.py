"""Keyboard command interpreter.

Maps a normalized key event to a palette command. Only the physical key
is classified here; what ``meta``/``alt`` do to ``next``/``prev`` depends
on the context and is decided by the machine.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional


class KeyEvent:
    """Host-neutral key event.

    Attributes:
        key: Key name in DOM style (``ArrowDown``, ``Enter``, ``n``)
        ctrl: Control held
        alt: Alt/Option held
        meta: Meta/Command held
        default_prevented: Whether some handler already claimed the key
    """

    __slots__ = ("key", "ctrl", "alt", "meta", "default_prevented", "_on_prevent")

    def __init__(
        self,
        key: str,
        *,
        ctrl: bool = False,
        alt: bool = False,
        meta: bool = False,
        default_prevented: bool = False,
        on_prevent: Optional[Callable[[], None]] = None,
    ) -> None:
        self.key = key
        self.ctrl = ctrl
        self.alt = alt
        self.meta = meta
        self.default_prevented = default_prevented
        self._on_prevent = on_prevent

    def prevent_default(self) -> None:
        """Mark the key as handled, forwarding to the host event if one is attached."""
        if self.default_prevented:
            return
        self.default_prevented = True
        if self._on_prevent is not None:
            self._on_prevent()

    def __repr__(self) -> str:
        mods = [name for name in ("ctrl", "alt", "meta") if getattr(self, name)]
        return f"KeyEvent({'+'.join([*mods, self.key])!r}, prevented={self.default_prevented})"


class KeyCommand(str, Enum):
    """Commands a key can trigger."""
    NEXT = "next"
    PREV = "prev"
    JUMP_TO_START = "jump-to-start"
    JUMP_TO_LAST = "jump-to-last"
    CONFIRM = "confirm"

    @property
    def prevents_default(self) -> bool:
        """Whether interpreting this command claims the key immediately."""
        return self in (KeyCommand.JUMP_TO_START, KeyCommand.JUMP_TO_LAST, KeyCommand.CONFIRM)


# vim/emacs style bindings, active only with ctrl
CTRL_NEXT_KEYS = frozenset({"n", "j"})
CTRL_PREV_KEYS = frozenset({"p", "k"})


def interpret_key(event: KeyEvent) -> Optional[KeyCommand]:
    """Classify ``event``; None for keys the palette does not handle.

    Events whose default action was already prevented are left alone.
    """
    if event.default_prevented:
        return None

    key = event.key
    if key == "ArrowDown" or (event.ctrl and key in CTRL_NEXT_KEYS):
        return KeyCommand.NEXT
    if key == "ArrowUp" or (event.ctrl and key in CTRL_PREV_KEYS):
        return KeyCommand.PREV
    if key == "Home":
        return KeyCommand.JUMP_TO_START
    if key == "End":
        return KeyCommand.JUMP_TO_LAST
    if key == "Enter":
        return KeyCommand.CONFIRM
    return None

"""cmdpalette - selection and filtering engine for keyboard-driven command palettes.

The engine keeps one selection over a fuzzy-filtered candidate list and
turns key presses into navigation through a small event machine.
"""

__version__ = "0.1.0"

# Lazy imports to avoid circular dependencies
def __getattr__(name: str):
    """Lazy import module components."""
    if name in ("create", "CommandMachine", "CommandContext", "Item", "Group", "KeyEvent"):
        from . import command
        return getattr(command, name)
    if name in ("ConfigManager", "PaletteConfig"):
        from .core import config
        return getattr(config, name)
    if name == "Log":
        from .util.log import Log
        return Log
    if name == "PaletteError":
        from .errors import PaletteError
        return PaletteError
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "__version__",
    "create",
    "CommandMachine",
    "CommandContext",
    "Item",
    "Group",
    "KeyEvent",
    "ConfigManager",
    "PaletteConfig",
    "Log",
    "PaletteError",
]

"""Minimal modal text editor with a UI-agnostic editing core."""

__all__ = [
    "adapters",
    "buffer",
    "actions",
    "modes",
    "keymaps",
    "render",
    "runtime",
    "storage",
]

__version__ = "0.1.0"

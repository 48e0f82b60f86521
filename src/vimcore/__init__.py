"""Modal terminal text editor core: buffer, viewport, modes and ex line."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "editor",
    "ex",
    "keymaps",
    "modes",
    "runtime",
    "view",
]

__version__ = "0.1.0"

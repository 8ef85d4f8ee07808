"""UI-agnostic engine for editing a sparse 2D grid of colored cells."""

__all__ = [
    "actions",
    "adapters",
    "config",
    "grid",
    "keymaps",
    "modes",
    "runtime",
    "session",
]

__version__ = "0.1.0"

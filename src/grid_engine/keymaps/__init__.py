"""Key bindings for the editor modes and the registry that resolves them."""

from .models import GLOBAL_MODE, ActionRef, Binding, KeyStroke, WhenClause
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats, ResolutionMatch
from .defaults import DEFAULT_BINDINGS, load_default_keymaps

__all__ = [
    "GLOBAL_MODE",
    "DEFAULT_BINDINGS",
    "ActionRef",
    "Binding",
    "KeyStroke",
    "KeymapConflictError",
    "KeymapRegistry",
    "RegistryStats",
    "ResolutionMatch",
    "WhenClause",
    "load_default_keymaps",
]

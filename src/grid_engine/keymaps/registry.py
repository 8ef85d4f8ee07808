"""Keymap registry: actions, bindings and keystroke resolution."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from grid_engine.runtime.telemetry import span

from .models import GLOBAL_MODE, ActionRef, Binding

Slot = Tuple[str, str]  # (mode, token)


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """A binding that fired, with the action it points at."""

    binding: Binding
    action: ActionRef

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.action(*args, **kwargs)


class KeymapConflictError(RuntimeError):
    """Two bindings claim the same key in the same mode and context."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        self.binding = binding
        self.conflicts = tuple(conflicts)
        names = ", ".join(b.id for b in self.conflicts)
        super().__init__(f"Binding '{binding.id}' collides with: {names}")


class KeymapRegistry:
    """Action table plus bindings indexed by ``(mode, token)``.

    A binding collides with another in the same slot only when both carry
    exactly the same when-clauses; differently gated bindings share a key
    and are told apart at resolve time by their clauses and priority.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._slots: Dict[Slot, List[str]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        """Counter bumped on every binding change."""

        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        if action_id not in self._actions:
            raise KeyError(f"Action '{action_id}' is not registered")
        return self._actions[action_id]

    def get_binding(self, binding_id: str) -> Binding:
        if binding_id not in self._bindings:
            raise KeyError(f"Binding '{binding_id}' is not registered")
        return self._bindings[binding_id]

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if action.id in self._actions and not replace:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' points at unknown action '{binding.action_id}'"
                )
            clashes = self.detect_conflicts(binding, ignore=(binding.id,))
            if not replace:
                if clashes:
                    handle.add_metadata("conflicts", ",".join(b.id for b in clashes))
                    raise KeymapConflictError(binding, clashes)
                if binding.id in self._bindings:
                    raise ValueError(f"Binding id '{binding.id}' already registered")
            for stale in clashes:
                self._drop(stale.id)
            self._drop(binding.id)
            self._add(binding)
        self._revision += 1
        return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        removed = self._drop(binding_id)
        if removed is not None:
            self._revision += 1
        return removed

    def rebind(self, binding_id: str, stroke: str) -> Binding:
        """Move a binding to another keystroke given in ``"ctrl+c"`` notation.

        On a collision the binding stays where it was.
        """

        updated = replace(self.get_binding(binding_id), stroke=stroke)
        clashes = self.detect_conflicts(updated, ignore=(binding_id,))
        if clashes:
            raise KeymapConflictError(updated, clashes)
        self._drop(binding_id)
        self._add(updated)
        self._revision += 1
        return updated

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        if mode is None:
            yield from self._bindings.values()
            return
        for (slot_mode, _token), ids in sorted(self._slots.items()):
            if slot_mode == mode:
                for binding_id in sorted(ids):
                    yield self._bindings[binding_id]

    def resolve(
        self,
        mode: str,
        token: str,
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> Optional[ResolutionMatch]:
        """Binding for ``token`` in ``mode``; global bindings are the fallback."""

        flags = context or {}
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "token": token},
        ) as handle:
            for scope in (mode, GLOBAL_MODE):
                match = self._best_match((scope, token), flags)
                if match is not None:
                    handle.add_metadata("binding_id", match.binding.id)
                    return match
            handle.add_metadata("status", "miss")
        return None

    def stats(self) -> RegistryStats:
        modes = sorted({mode for mode, _token in self._slots})
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(modes),
        )

    def detect_conflicts(
        self, binding: Binding, *, ignore: Sequence[str] | None = None
    ) -> list[Binding]:
        skip = set(ignore or ())
        wanted = binding.when_map
        return [
            self._bindings[other]
            for other in self._slots.get((binding.mode, binding.token), ())
            if other not in skip and self._bindings[other].when_map == wanted
        ]

    def _best_match(
        self, slot: Slot, flags: Mapping[str, bool]
    ) -> Optional[ResolutionMatch]:
        allowed = [
            self._bindings[binding_id]
            for binding_id in self._slots.get(slot, ())
            if self._bindings[binding_id].allows(flags)
        ]
        if not allowed:
            return None
        best = min(allowed, key=lambda b: (-b.priority, b.id))
        return ResolutionMatch(binding=best, action=self._actions[best.action_id])

    def _add(self, binding: Binding) -> None:
        self._bindings[binding.id] = binding
        self._slots.setdefault((binding.mode, binding.token), []).append(binding.id)

    def _drop(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is None:
            return None
        slot = (binding.mode, binding.token)
        ids = self._slots.get(slot, [])
        if binding_id in ids:
            ids.remove(binding_id)
        if not ids:
            self._slots.pop(slot, None)
        return binding


__all__ = [
    "KeymapConflictError",
    "KeymapRegistry",
    "RegistryStats",
    "ResolutionMatch",
]

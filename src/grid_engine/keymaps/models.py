"""Key binding records: strokes, context clauses and action references."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Mapping

# Bindings registered under this mode fire in every mode except "nop", which
# ignores keys.
GLOBAL_MODE = "*"


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """A lowercased key name plus its sorted, de-duplicated modifiers."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        cleaned = {m.strip().lower() for m in self.modifiers if m.strip()}
        object.__setattr__(self, "key", self.key.lower())
        object.__setattr__(self, "modifiers", tuple(sorted(cleaned)))

    @property
    def token(self) -> str:
        return "+".join((*self.modifiers, self.key))

    @classmethod
    def parse(cls, text: str) -> "KeyStroke":
        """Build a stroke from ``"ctrl+c"`` notation."""

        *mods, key = [part for part in text.split("+") if part] or [""]
        if not key:
            raise ValueError("key notation cannot be empty")
        return cls(key, tuple(mods))


@dataclass(frozen=True, slots=True)
class WhenClause:
    """Requires one context flag to be set (or, with ``!flag``, unset)."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        text = expression.strip()
        negated = text.startswith("!")
        flag = text[1:] if negated else text
        if not flag:
            raise ValueError("expression cannot be empty")
        return cls(flag, not negated)

    def evaluate(self, flags: Mapping[str, bool]) -> bool:
        return bool(flags.get(self.flag)) == self.expected


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named handler called as ``handler(mode, key)``; returns a ModeResult."""

    id: str
    handler: Callable[..., object]
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


def _parse_clauses(clauses: Iterable[object]) -> tuple[WhenClause, ...]:
    return tuple(
        clause if isinstance(clause, WhenClause) else WhenClause.parse(str(clause))
        for clause in clauses
    )


@dataclass(frozen=True, slots=True)
class Binding:
    """Maps a stroke in one mode (or :data:`GLOBAL_MODE`) to an action id."""

    id: str
    mode: str
    stroke: KeyStroke
    action_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()
    priority: int = 0

    def __post_init__(self) -> None:
        for label in ("id", "mode", "action_id"):
            if not getattr(self, label):
                raise ValueError(f"binding {label} cannot be empty")
        if isinstance(self.stroke, str):
            object.__setattr__(self, "stroke", KeyStroke.parse(self.stroke))
        object.__setattr__(self, "when", _parse_clauses(self.when))

    @property
    def token(self) -> str:
        return self.stroke.token

    @property
    def when_map(self) -> Mapping[str, bool]:
        return {clause.flag: clause.expected for clause in self.when}

    def allows(self, flags: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(flags) for clause in self.when)


__all__ = [
    "GLOBAL_MODE",
    "ActionRef",
    "Binding",
    "KeyStroke",
    "WhenClause",
]

"""Value types for single-key bindings and the actions they trigger."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable


def mode_key(mode: object) -> str:
    """Plain string key for a mode name or a str-valued mode enum."""

    return str(getattr(mode, "value", mode))


def key_token(key: str, modifiers: Iterable[str] = ()) -> str:
    """Lookup token for a key press, e.g. ``"x"`` or ``"ctrl+x"``.

    Modifiers are lower-cased, de-duplicated and sorted; the key itself keeps
    its case so ``"j"`` and ``"J"`` stay distinct.
    """

    if not key:
        raise ValueError("key cannot be empty")
    cleaned = sorted({mod.strip().lower() for mod in modifiers if mod.strip()})
    return "+".join([*cleaned, key])


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named handler invoked as ``handler(context, match)``."""

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


@dataclass(frozen=True, slots=True)
class Binding:
    """Maps one key (plus modifiers) in one mode to an action id."""

    id: str
    mode: str
    key: str
    action_id: str
    description: str = ""
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.mode:
            raise ValueError("binding mode cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")
        object.__setattr__(self, "mode", mode_key(self.mode))
        object.__setattr__(self, "modifiers", tuple(self.modifiers))

    @property
    def token(self) -> str:
        return key_token(self.key, self.modifiers)


__all__ = ["ActionRef", "Binding", "key_token", "mode_key"]

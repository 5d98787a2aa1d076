"""Keymap registry: the action catalogue and one key table per mode."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from mini_vi.runtime.telemetry import span

from .models import ActionRef, Binding, mode_key


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a key is already bound in the binding's mode."""

    def __init__(self, binding: Binding, existing: Binding):
        super().__init__(
            f"Binding '{binding.id}' reuses {binding.mode}:{binding.token} "
            f"already bound by '{existing.id}'"
        )
        self.binding = binding
        self.existing = existing


class KeymapRegistry:
    """Owns actions and bindings; at most one binding per mode and key.

    ``revision`` increases on every binding change so resolvers can drop
    stale lookups.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._tables: Dict[str, Dict[str, str]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def lookup(self, mode: object, token: str) -> Optional[Binding]:
        binding_id = self._tables.get(mode_key(mode), {}).get(token)
        return self._bindings[binding_id] if binding_id else None

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if not replace and action.id in self._actions:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding``; with ``replace`` it evicts whatever holds its key
        or its id instead of raising."""

        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            existing = self.lookup(binding.mode, binding.token)
            if not replace:
                if existing is not None and existing.id != binding.id:
                    handle.add_metadata("conflict", existing.id)
                    raise KeymapConflictError(binding, existing)
                if binding.id in self._bindings:
                    raise ValueError(f"Binding id '{binding.id}' already registered")

            for stale in (existing, self._bindings.get(binding.id)):
                if stale is not None and stale.id in self._bindings:
                    self._drop(stale)

            self._bindings[binding.id] = binding
            self._tables.setdefault(binding.mode, {})[binding.token] = binding.id
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.get(binding_id)
        if binding is None:
            return None
        self._drop(binding)
        self._revision += 1
        return binding

    def iter_bindings(self, mode: Optional[object] = None) -> Iterator[Binding]:
        if mode is None:
            yield from self._bindings.values()
            return
        for binding_id in self._tables.get(mode_key(mode), {}).values():
            yield self._bindings[binding_id]

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(sorted(self._tables)),
        )

    def _drop(self, binding: Binding) -> None:
        del self._bindings[binding.id]
        table = self._tables.get(binding.mode, {})
        if table.get(binding.token) == binding.id:
            del table[binding.token]
        if not table:
            self._tables.pop(binding.mode, None)


__all__ = ["KeymapConflictError", "KeymapRegistry", "RegistryStats"]

"""Key-to-action resolution on top of ``KeymapRegistry``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Optional, Tuple

from mini_vi.runtime.telemetry import span

from .models import ActionRef, Binding, mode_key
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "miss"]
    match: Optional[ResolutionMatch] = None


class KeymapResolver:
    """Pairs the binding for a key with its action.

    Lookups are memoised per ``(mode, token)`` until the registry revision
    changes.
    """

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._revision = registry.revision()
        self._cache: Dict[Tuple[str, str], Optional[ResolutionMatch]] = {}

    def resolve(self, mode: object, token: str) -> ResolutionResult:
        mode_name = mode_key(mode)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            metadata={"mode": mode_name, "token": token},
        ) as handle:
            match = self._lookup(mode_name, token)
            if match is None:
                handle.add_metadata("status", "miss")
                return ResolutionResult(status="miss")
            handle.add_metadata("binding_id", match.binding.id)
            return ResolutionResult(status="match", match=match)

    def _lookup(self, mode: str, token: str) -> Optional[ResolutionMatch]:
        revision = self._registry.revision()
        if revision != self._revision:
            self._cache.clear()
            self._revision = revision

        cache_key = (mode, token)
        if cache_key not in self._cache:
            binding = self._registry.lookup(mode, token)
            self._cache[cache_key] = (
                ResolutionMatch(
                    binding=binding,
                    action=self._registry.get_action(binding.action_id),
                )
                if binding is not None
                else None
            )
        return self._cache[cache_key]


__all__ = ["KeymapResolver", "ResolutionMatch", "ResolutionResult"]

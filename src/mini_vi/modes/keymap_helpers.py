"""Glue between modes and the keymap resolver."""

from __future__ import annotations

from typing import Optional

from mini_vi.keymaps import KeymapResolver, ResolutionMatch, key_token
from mini_vi.runtime import telemetry

from .base_mode import EditorMode, KeyInput, ModeContext, ModeResult


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


def dispatch_binding(
    context: ModeContext, resolver: KeymapResolver, mode: EditorMode, key: KeyInput
) -> Optional[ModeResult]:
    """Run the action bound to ``key`` in ``mode``; ``None`` when unbound."""

    result = resolver.resolve(mode, key_token(key.key, key.modifiers))
    if result.match is None:
        return None
    return execute_match(context, result.match)


def execute_match(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    with telemetry.span(
        "keymaps::execute",
        component="keymaps",
        metadata={"binding_id": match.binding.id, "action": match.action.id},
    ):
        outcome = match.action(context, match)

    if isinstance(outcome, ModeResult):
        return outcome
    return ModeResult(consumed=True)


__all__ = ["dispatch_binding", "execute_match", "require_keymap_resolver"]

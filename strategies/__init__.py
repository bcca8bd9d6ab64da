"""Strategy registry."""

from __future__ import annotations

from typing import Any, List

from .base import BaseStrategy


def _normalized(name: str) -> str:
    return (name or "").strip().lower()


def get_strategy(name: str, pillar, **options: Any) -> BaseStrategy:
    normalized = _normalized(name)
    if normalized in {"strict", "strict_patterns"}:
        from .strict import StrictPatternStrategy

        return StrictPatternStrategy(pillar, **options)
    if normalized in {"loose", "loose_labels"}:
        from .loose import LooseLabelStrategy

        return LooseLabelStrategy(pillar, **options)
    raise ValueError(f"Unknown strategy '{name}'")


def available_strategies() -> List[str]:
    return ["strict", "loose"]


def default_pipeline(pillar, **loose_options: Any) -> List[BaseStrategy]:
    """Strict patterns first, then per-field label search."""
    return [get_strategy("strict", pillar), get_strategy("loose", pillar, **loose_options)]

"""Caller-side gating policies around extraction."""

from __future__ import annotations

from typing import List, Optional

from config import ExtractionConfig
from models import ProfileDraft
from pillars import Pillar, get_spec


def check_input_text(text: Optional[str], min_chars: int = ExtractionConfig.MIN_INPUT_CHARS) -> List[str]:
    issues: List[str] = []

    stripped = (text or "").strip()
    if not stripped:
        issues.append("EMPTY_INPUT")
    elif len(stripped) < min_chars:
        issues.append("INPUT_TOO_SHORT")

    return issues


def pillars_needing_review(draft: ProfileDraft) -> List[Pillar]:
    """Pillars that fall back to manual entry or have unresolved fields."""
    pillars: List[Pillar] = []

    for result in draft.results():
        if not result.found or result.unresolved_fields:
            pillars.append(result.pillar)

    return pillars


def extraction_summary(draft: ProfileDraft) -> str:
    extracted = [get_spec(result.pillar).title for result in draft.results() if result.found]
    if not extracted:
        return "No values could be extracted automatically. Check the text format or adjust manually."
    return f"Extracted: {', '.join(extracted)}. Review before saving."

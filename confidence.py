"""Deterministic confidence scoring for extracted profile drafts."""

from __future__ import annotations

from dataclasses import dataclass

from config import ExtractionConfig
from models import ProfileDraft


@dataclass
class ConfidenceBreakdown:
    """Transparent confidence math shown next to an imported profile."""

    pillar_coverage: float
    provenance_quality: float
    field_resolution: float

    def clamp(self) -> "ConfidenceBreakdown":
        def _c(val: float) -> float:
            return max(0.0, min(1.0, float(val)))

        return ConfidenceBreakdown(
            pillar_coverage=_c(self.pillar_coverage),
            provenance_quality=_c(self.provenance_quality),
            field_resolution=_c(self.field_resolution),
        )


def draft_confidence(draft: ProfileDraft) -> ConfidenceBreakdown:
    results = draft.results()
    found = [result for result in results if result.found]
    if not found:
        return ConfidenceBreakdown(0.0, 0.0, 0.0)

    weights = ExtractionConfig.PROVENANCE_WEIGHTS
    provenance_quality = sum(weights.get(r.provenance.value, 0.0) for r in found) / len(found)
    resolved = sum(sum(r.resolved.values()) for r in found)
    total = sum(len(r.resolved) for r in found)
    return ConfidenceBreakdown(
        pillar_coverage=len(found) / len(results),
        provenance_quality=provenance_quality,
        field_resolution=resolved / total if total else 0.0,
    )


def headline(breakdown: ConfidenceBreakdown) -> float:
    b = breakdown.clamp()
    score = 0.5 * b.pillar_coverage + 0.3 * b.provenance_quality + 0.2 * b.field_resolution
    return round(score, 3)


def confidence_score(draft: ProfileDraft) -> int:
    """Confidence on the 0-100 scale stored alongside imported profiles."""
    return int(round(headline(draft_confidence(draft)) * ExtractionConfig.IMPORTED_CONFIDENCE_CEILING))

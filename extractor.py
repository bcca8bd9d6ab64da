"""
Pillar Orchestrator

Runs each pillar's strategy pipeline (strict patterns, then loose label
search) over raw report text and assembles the resulting ProfileDraft. Each
pillar is extracted independently, so a caller can retry one pillar after
editing the text without touching the others.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence

from candidates import DEFAULT_WEIGHTS, CandidateWeights
from config import ExtractionConfig
from models import PillarExtractionResult, ProfileDraft
from pillars import Pillar
from strategies import default_pipeline

logger = logging.getLogger(__name__)

Strategy = Callable[[str], Optional[PillarExtractionResult]]


class ReportExtractor:
    """Turn report text into per-pillar score results."""

    def __init__(
        self,
        window_size: int = ExtractionConfig.WINDOW_SIZE,
        anchor_span: int = ExtractionConfig.ANCHOR_SPAN,
        weights: CandidateWeights = DEFAULT_WEIGHTS,
        pipelines: Optional[Dict[Pillar, Sequence[Strategy]]] = None,
    ) -> None:
        self.pipelines: Dict[Pillar, List[Strategy]] = {}
        for pillar in Pillar:
            if pipelines and pillar in pipelines:
                self.pipelines[pillar] = list(pipelines[pillar])
            else:
                self.pipelines[pillar] = default_pipeline(
                    pillar, window_size=window_size, anchor_span=anchor_span, weights=weights
                )

    def extract_pillar(self, text: str, pillar) -> PillarExtractionResult:
        pillar = Pillar(pillar)
        text = text or ""
        for strategy in self.pipelines[pillar]:
            result = strategy(text)
            if result is not None:
                logger.info(
                    f"{pillar.value}: extracted via {result.provenance.value} "
                    f"({sum(result.resolved.values())}/{len(result.resolved)} fields)"
                )
                return result
        logger.info(f"{pillar.value}: no match")
        return PillarExtractionResult.not_found(pillar)

    def extract(self, text: str) -> ProfileDraft:
        results = {pillar.value: self.extract_pillar(text, pillar) for pillar in Pillar}
        draft = ProfileDraft(**results)
        logger.debug(f"Extraction matched {draft.pillars_matched}/3 pillars")
        return draft


_default_extractor: Optional[ReportExtractor] = None


def _extractor() -> ReportExtractor:
    global _default_extractor
    if _default_extractor is None:
        _default_extractor = ReportExtractor()
    return _default_extractor


def extract(text: str) -> ProfileDraft:
    return _extractor().extract(text)


def extract_pillar(text: str, pillar) -> PillarExtractionResult:
    return _extractor().extract_pillar(text, pillar)

"""Per-field label search used when no strict pattern matches."""

from __future__ import annotations

import logging
import re
from typing import Dict, Optional

from candidates import DEFAULT_WEIGHTS, CandidateWeights, find_labeled_number
from config import ExtractionConfig
from models import PillarExtractionResult, Provenance
from normalization import normalize_scores

from .base import BaseStrategy

logger = logging.getLogger(__name__)


class LooseLabelStrategy(BaseStrategy):
    """
    Resolve each field independently from the numbers following its labels.

    Sibling field labels bound every search window, so a table row cannot
    bleed into the next one. Pillars that declare anchor headings are first
    scoped to the section that starts at the earliest anchor.
    """

    name = "loose"

    def __init__(
        self,
        pillar,
        window_size: int = ExtractionConfig.WINDOW_SIZE,
        anchor_span: int = ExtractionConfig.ANCHOR_SPAN,
        weights: CandidateWeights = DEFAULT_WEIGHTS,
    ) -> None:
        super().__init__(pillar)
        self.window_size = window_size
        self.anchor_span = anchor_span
        self.weights = weights
        self._anchor_pattern = (
            re.compile("|".join(self.spec.anchors), re.IGNORECASE) if self.spec.anchors else None
        )

    def scope(self, text: str) -> str:
        if self._anchor_pattern is None:
            return text
        match = self._anchor_pattern.search(text)
        if not match:
            return text
        start = match.start()
        return text[start:start + self.anchor_span]

    def resolve_fields(self, text: str) -> Dict[str, Optional[float]]:
        """Return the raw disambiguated value per field, None where nothing was found."""
        scoped = self.scope(text or "")
        return {
            field: find_labeled_number(
                scoped,
                self.spec.labels_for(field),
                self.spec.domain,
                window_size=self.window_size,
                stop_labels=self.spec.stop_labels_for(field),
                weights=self.weights,
            )
            for field in self.spec.fields
        }

    def extract(self, text: str) -> Optional[PillarExtractionResult]:
        if not text:
            return None
        raw = self.resolve_fields(text)
        resolved = {field: value is not None for field, value in raw.items()}
        found_count = sum(1 for flag in resolved.values() if flag)
        if found_count < self.spec.min_resolved:
            logger.debug(
                f"{self.pillar.value}: loose extraction resolved "
                f"{found_count}/{len(self.spec.fields)} fields (needs {self.spec.min_resolved})"
            )
            return None

        return PillarExtractionResult(
            pillar=self.pillar,
            found=True,
            scores=normalize_scores(raw, self.pillar),
            provenance=Provenance.LOOSE,
            resolved=resolved,
        )

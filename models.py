from __future__ import annotations

import math
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from pillars import Pillar, get_spec


class Provenance(str, Enum):
    STRICT = "strict"
    LOOSE = "loose"
    NONE = "none"


class PillarExtractionResult(BaseModel):
    """Outcome of one pillar's extraction attempt."""

    pillar: Pillar
    found: bool = False
    scores: Optional[Dict[str, float]] = None
    provenance: Provenance = Provenance.NONE
    resolved: Dict[str, bool] = Field(default_factory=dict)

    @field_validator("scores")
    def validate_finite_scores(cls, v: Optional[Dict[str, float]]) -> Optional[Dict[str, float]]:
        if v is None:
            return v
        for field, value in v.items():
            if not math.isfinite(value):
                raise ValueError(f"Score for '{field}' is not finite: {value}")
        return v

    @model_validator(mode="after")
    def validate_against_pillar(self) -> "PillarExtractionResult":
        spec = get_spec(self.pillar)

        # Every field is reported, resolved or not.
        resolved = {field: bool(self.resolved.get(field, False)) for field in spec.fields}
        unknown = set(self.resolved) - set(spec.fields)
        if unknown:
            raise ValueError(f"Unknown fields for {self.pillar.value}: {sorted(unknown)}")
        self.resolved = resolved

        if self.found:
            if self.scores is None:
                raise ValueError("A found pillar must carry scores")
            if self.provenance == Provenance.NONE:
                raise ValueError("A found pillar needs a strict or loose provenance")
            resolved_count = sum(1 for flag in resolved.values() if flag)
            if resolved_count < spec.min_resolved:
                raise ValueError(
                    f"{self.pillar.value} resolved {resolved_count} fields, needs {spec.min_resolved}"
                )
        else:
            if self.scores is not None or self.provenance != Provenance.NONE:
                raise ValueError("An unfound pillar has no scores and provenance 'none'")

        for field, value in (self.scores or {}).items():
            if field not in spec.fields:
                raise ValueError(f"Unknown score field '{field}' for {self.pillar.value}")
            if not resolved[field]:
                raise ValueError(f"Score present for unresolved field '{field}'")
            if not spec.domain.contains(value):
                raise ValueError(f"{self.pillar.value}.{field}={value} outside domain")
        return self

    @classmethod
    def not_found(cls, pillar) -> "PillarExtractionResult":
        return cls(pillar=Pillar(pillar))

    @property
    def unresolved_fields(self) -> List[str]:
        return [field for field, flag in self.resolved.items() if not flag]

    def display_scores(self) -> Dict[str, float]:
        """
        Scores for an editing surface: resolved values plus domain midpoints.

        The midpoints are placeholders for manual adjustment only; ``resolved``
        still tells which fields were actually extracted.
        """
        spec = get_spec(self.pillar)
        filled: Dict[str, float] = {}
        for field in spec.fields:
            if self.scores and field in self.scores:
                filled[field] = self.scores[field]
            else:
                filled[field] = float(spec.domain.midpoint)
        return filled


class ProfileDraft(BaseModel):
    style: PillarExtractionResult
    motivators: PillarExtractionResult
    attributes: PillarExtractionResult
    pillars_matched: Optional[int] = None

    @model_validator(mode="after")
    def validate_pillars(self) -> "ProfileDraft":
        for pillar in Pillar:
            result = getattr(self, pillar.value)
            if result.pillar != pillar:
                raise ValueError(f"Result for {result.pillar.value} stored under {pillar.value}")

        # The count is derived from the results; a supplied value must agree
        matched = sum(1 for result in self.results() if result.found)
        if self.pillars_matched is not None and self.pillars_matched != matched:
            raise ValueError(f"pillars_matched={self.pillars_matched} but {matched} pillars are found")
        self.pillars_matched = matched
        return self

    def results(self) -> List[PillarExtractionResult]:
        return [self.style, self.motivators, self.attributes]

    def result_for(self, pillar) -> PillarExtractionResult:
        return getattr(self, Pillar(pillar).value)

    @property
    def provenance(self) -> Dict[str, str]:
        return {result.pillar.value: result.provenance.value for result in self.results()}

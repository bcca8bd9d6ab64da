"""Rigid multi-field patterns for well-formed report layouts."""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

from models import PillarExtractionResult, Provenance
from normalization import normalize_scores, parse_number
from pillars import Pillar

from .base import BaseStrategy

logger = logging.getLogger(__name__)

_FLAGS = re.IGNORECASE | re.DOTALL
_NUM = r"(\d+(?:[.,]\d+)?)"
_INT = r"(\d+)"

# Widest gap allowed between the end of one labeled value and the next label.
DEFAULT_FIELD_GAP = 300
# Room for the next label and its value after the gap.
_STEP_SPAN = 200


def _compile(*parts: str) -> re.Pattern:
    return re.compile("".join(parts), _FLAGS)


class FieldSequence:
    """
    Labeled values that must appear in order, each close to the previous one.

    Each step is searched on its own, starting where the previous step ended
    and limited to ``gap`` characters of slack, taking the first hit. A
    missing later label only costs one bounded search per occurrence of the
    first label, so run time stays linear in the text length.
    """

    def __init__(self, *steps: str, gaps: Union[int, Sequence[int]] = DEFAULT_FIELD_GAP) -> None:
        self.steps = tuple(re.compile(step, _FLAGS) for step in steps)
        if isinstance(gaps, int):
            gaps = [gaps] * (len(self.steps) - 1)
        if len(gaps) != len(self.steps) - 1:
            raise ValueError(f"Expected {len(self.steps) - 1} gaps, got {len(gaps)}")
        self.gaps = tuple(gaps)

    def iter_groups(self, text: str) -> Iterator[Tuple[str, ...]]:
        head, rest = self.steps[0], self.steps[1:]
        for first in head.finditer(text):
            groups = list(first.groups())
            position = first.end()
            for step, gap in zip(rest, self.gaps):
                match = step.search(text, position, min(len(text), position + gap + _STEP_SPAN))
                if match is None or match.start() - position > gap:
                    break
                groups.extend(match.groups())
                position = match.end()
            else:
                yield tuple(groups)


StrictPattern = Union[re.Pattern, FieldSequence]


def iter_pattern_groups(pattern: StrictPattern, text: str) -> Iterator[Tuple[str, ...]]:
    if isinstance(pattern, FieldSequence):
        return pattern.iter_groups(text)
    return (match.groups() for match in pattern.finditer(text))


# Ordered most reliable first: labeled sequences, then anchored blocks,
# then bare number runs after the pillar name.
STRICT_PATTERNS: Dict[Pillar, List[StrictPattern]] = {
    Pillar.STYLE: [
        FieldSequence(
            r"(?:\bD\b|Domin[âa]ncia|Dominance)[:\s=]*" + _INT,
            r"(?:\bI\b|Influ[êe]ncia|Influence)[:\s=]*" + _INT,
            r"(?:\bS\b|Estabilidade|Steadiness)[:\s=]*" + _INT,
            r"(?:\bC\b|Conformidade|Compliance)[:\s=]*" + _INT,
        ),
        FieldSequence(
            r"(?:Natural|Adapted|Adaptado|DISC)",
            r"\bD[:\s]*" + _INT,
            r"\bI[:\s]*" + _INT,
            r"\bS[:\s]*" + _INT,
            r"\bC[:\s]*" + _INT,
            gaps=(50, 20, 20, 20),
        ),
        _compile(r"DISC.{0,100}?(\d{1,3})\D+(\d{1,3})\D+(\d{1,3})\D+(\d{1,3})"),
    ],
    Pillar.MOTIVATORS: [
        FieldSequence(
            r"(?:Est[ée]tic[ao]?|Aesthetic)[:\s=]*" + _NUM,
            r"(?:Econ[ôo]mic[ao]?)[:\s=]*" + _NUM,
            r"(?:Individualista|Individualist)[:\s=]*" + _NUM,
            r"(?:Pol[íi]tic[ao]|Political)[:\s=]*" + _NUM,
            r"(?:Altru[íi]st[ao]|Altruistic)[:\s=]*" + _NUM,
            r"(?:Regulador[a]?|Regulatory)[:\s=]*" + _NUM,
            r"(?:Te[óo]ric[ao]|Theoretical)[:\s=]*" + _NUM,
        ),
        FieldSequence(
            r"Est[ée]tic[ao]?\s*[|:]\s*" + _NUM,
            r"Econ[ôo]mic[ao]?\s*[|:]\s*" + _NUM,
            r"Individualista\s*[|:]\s*" + _NUM,
            r"Pol[íi]tic[ao]\s*[|:]\s*" + _NUM,
            r"Altru[íi]st[ao]\s*[|:]\s*" + _NUM,
            r"Regulador[a]?\s*[|:]\s*" + _NUM,
            r"Te[óo]ric[ao]\s*[|:]\s*" + _NUM,
        ),
        _compile(r"Values.{0,200}?" + r"\D+".join([r"(\d{1,3})"] * 7)),
        FieldSequence(
            r"Est[ée]tic[ao]?\s*[|:\-]?\s*" + _NUM,
            r"Econ[ôo]mic[ao]?\s*[|:\-]?\s*" + _NUM,
            r"Individual[a-z]*\s*[|:\-]?\s*" + _NUM,
            r"Pol[íi]tic[ao]\s*[|:\-]?\s*" + _NUM,
            r"Altru[íi]st[ao]\s*[|:\-]?\s*" + _NUM,
            r"Regulad[a-z]*\s*[|:\-]?\s*" + _NUM,
            r"Te[óo]ric[ao]\s*[|:\-]?\s*" + _NUM,
            gaps=100,
        ),
    ],
    Pillar.ATTRIBUTES: [
        FieldSequence(
            r"(?:Empatia|Empathy)[:\s=]*" + _NUM,
            r"(?:Pensamento Pr[áa]tico|Practical Thinking)[:\s=]*" + _NUM,
            r"(?:Julgamento de Sistemas|Systems Judge?ment)[:\s=]*" + _NUM,
            r"(?:Auto-?estima|Self.?Esteem)[:\s=]*" + _NUM,
            r"(?:Consci[êe]ncia d[ea] (?:Papel|Fun[çc][ãa]o)|Role Awareness)[:\s=]*" + _NUM,
            r"(?:Auto-?dire[çc][ãa]o|Self.?Direction)[:\s=]*" + _NUM,
        ),
        FieldSequence(
            r"Empat[a-z]*[:\s]+" + _NUM,
            r"Pr[áa]tico[:\s]+" + _NUM,
            r"Sistemas?[:\s]+" + _NUM,
            r"Estima[:\s]+" + _NUM,
            r"(?:Papel|Fun[çc][ãa]o)[:\s]+" + _NUM,
            r"Dire[çc][ãa]o[:\s]+" + _NUM,
            gaps=100,
        ),
        _compile(r"Attribute\s*Index.{0,300}?" + r"\D+".join([_NUM] * 6)),
    ],
}


class StrictPatternStrategy(BaseStrategy):
    """Try each strict pattern in order; the first complete in-domain match wins."""

    name = "strict"

    def __init__(self, pillar, patterns: Optional[Sequence[StrictPattern]] = None) -> None:
        super().__init__(pillar)
        self.patterns = tuple(patterns if patterns is not None else STRICT_PATTERNS[self.pillar])

    def match_pattern(self, pattern: StrictPattern, text: str) -> Optional[Dict[str, float]]:
        fields = self.spec.fields
        for groups in iter_pattern_groups(pattern, text):
            if len(groups) != len(fields):
                continue
            values = [parse_number(group) for group in groups]
            if any(value is None for value in values):
                continue
            if not all(self.spec.domain.contains(value) for value in values):
                continue
            return dict(zip(fields, values))
        return None

    def extract(self, text: str) -> Optional[PillarExtractionResult]:
        if not text:
            return None
        for index, pattern in enumerate(self.patterns):
            raw = self.match_pattern(pattern, text)
            if raw is None:
                continue
            logger.debug(f"{self.pillar.value}: strict pattern #{index} matched")
            return PillarExtractionResult(
                pillar=self.pillar,
                found=True,
                scores=normalize_scores(raw, self.pillar),
                provenance=Provenance.STRICT,
                resolved={field: True for field in self.spec.fields},
            )
        return None

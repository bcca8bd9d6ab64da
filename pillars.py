"""Pillar definitions and bilingual label tables for report extraction."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, Tuple


class Pillar(str, Enum):
    STYLE = "style"
    MOTIVATORS = "motivators"
    ATTRIBUTES = "attributes"


@dataclass(frozen=True)
class DomainSpec:
    """Closed numeric range a pillar's scores live in."""

    minimum: float
    maximum: float
    step: float

    @property
    def midpoint(self) -> float:
        return (self.minimum + self.maximum) / 2

    @property
    def low_value_ceiling(self) -> float:
        # Deliberately 5% of the span rather than the flat "value <= 5" rule:
        # identical on 0..100, but on 0..10 a flat 5 would penalize ordinary
        # attribute scores such as 4.5.
        return self.minimum + 0.05 * (self.maximum - self.minimum)

    @property
    def decimals(self) -> int:
        if self.step >= 1:
            return 0
        return max(0, int(round(-math.log10(self.step))))

    def contains(self, value: float) -> bool:
        return self.minimum <= value <= self.maximum


PERCENT_DOMAIN = DomainSpec(minimum=0, maximum=100, step=1)
ATTRIBUTE_DOMAIN = DomainSpec(minimum=0, maximum=10, step=0.1)


LABEL_SYNONYMS: Dict[Pillar, Dict[str, Tuple[str, ...]]] = {
    Pillar.STYLE: {
        "d": ("dominância", "dominancia", "dominance"),
        "i": ("influência", "influencia", "influence"),
        "s": ("estabilidade", "steadiness", "stability"),
        "c": ("conformidade", "compliance", "conscientiousness"),
    },
    Pillar.MOTIVATORS: {
        "aesthetic": ("estética", "estético", "estetica", "estetico", "aesthetic"),
        "economic": ("econômico", "economico", "econômica", "economica", "economic"),
        "individualist": ("individualista", "individualist", "individual"),
        "political": ("político", "politico", "política", "politica", "political"),
        "altruistic": ("altruísta", "altruista", "altruístico", "altruistico", "altruistic"),
        "regulatory": ("regulador", "reguladora", "regulatório", "regulatorio", "regulatory"),
        "theoretical": ("teórico", "teorico", "teórica", "teorica", "theoretical"),
    },
    Pillar.ATTRIBUTES: {
        "empathy": ("empatia", "empathy"),
        "practical_thinking": ("pensamento prático", "pensamento pratico", "practical thinking"),
        "systems_judgment": (
            "julgamento de sistemas",
            "systems judgment",
            "systems judgement",
        ),
        "self_esteem": ("autoestima", "auto-estima", "self esteem", "self-esteem"),
        "role_awareness": (
            "consciência de papel",
            "consciencia de papel",
            "consciência da função",
            "consciencia da funcao",
            "role awareness",
        ),
        "self_direction": ("autodireção", "autodirecao", "self direction", "self-direction"),
    },
}

PILLAR_TITLES: Dict[Pillar, str] = {
    Pillar.STYLE: "DISC",
    Pillar.MOTIVATORS: "Motivators",
    Pillar.ATTRIBUTES: "Attribute Index",
}


@dataclass(frozen=True)
class PillarSpec:
    pillar: Pillar
    fields: Tuple[str, ...]
    domain: DomainSpec
    min_resolved: int
    anchors: Tuple[str, ...] = ()

    @property
    def title(self) -> str:
        return PILLAR_TITLES[self.pillar]

    def labels_for(self, field: str) -> Tuple[str, ...]:
        return LABEL_SYNONYMS[self.pillar][field]

    def stop_labels_for(self, field: str) -> Tuple[str, ...]:
        """Labels of every sibling field, used to bound a field's search window."""
        stops: List[str] = []
        for sibling in self.fields:
            if sibling == field:
                continue
            stops.extend(self.labels_for(sibling))
        return tuple(stops)


PILLAR_SPECS: Dict[Pillar, PillarSpec] = {
    Pillar.STYLE: PillarSpec(
        pillar=Pillar.STYLE,
        fields=("d", "i", "s", "c"),
        domain=PERCENT_DOMAIN,
        min_resolved=4,
    ),
    Pillar.MOTIVATORS: PillarSpec(
        pillar=Pillar.MOTIVATORS,
        fields=(
            "aesthetic",
            "economic",
            "individualist",
            "political",
            "altruistic",
            "regulatory",
            "theoretical",
        ),
        domain=PERCENT_DOMAIN,
        min_resolved=5,
        anchors=(
            r"Resumo Executivo dos Valores Motivacionais",
            r"Valores Motivacionais",
            r"Values Index",
            r"Motivators",
        ),
    ),
    Pillar.ATTRIBUTES: PillarSpec(
        pillar=Pillar.ATTRIBUTES,
        fields=(
            "empathy",
            "practical_thinking",
            "systems_judgment",
            "self_esteem",
            "role_awareness",
            "self_direction",
        ),
        domain=ATTRIBUTE_DOMAIN,
        min_resolved=4,
    ),
}


def get_spec(pillar) -> PillarSpec:
    """Return the spec for a Pillar or its string value."""
    return PILLAR_SPECS[Pillar(pillar)]


def validate_pillar_specs(
    specs: Mapping[Pillar, PillarSpec],
    labels: Mapping[Pillar, Mapping[str, Tuple[str, ...]]],
) -> None:
    """Raise ValueError when the label tables cannot support extraction."""

    errors: List[str] = []
    for pillar in Pillar:
        spec = specs.get(pillar)
        if spec is None:
            errors.append(f"{pillar.value}: missing pillar spec")
            continue
        domain = spec.domain
        if not (domain.minimum < domain.maximum) or domain.step <= 0:
            errors.append(f"{pillar.value}: invalid domain {domain}")
        if not 1 <= spec.min_resolved <= len(spec.fields):
            errors.append(
                f"{pillar.value}: min_resolved={spec.min_resolved} outside 1..{len(spec.fields)}"
            )
        table = labels.get(pillar) or {}
        for field in spec.fields:
            synonyms = table.get(field) or ()
            if not synonyms:
                errors.append(f"{pillar.value}.{field}: empty synonym list")
            elif any(not label.strip() for label in synonyms):
                errors.append(f"{pillar.value}.{field}: blank synonym")
        extra = set(table) - set(spec.fields)
        if extra:
            errors.append(f"{pillar.value}: labels for unknown fields {sorted(extra)}")

    if errors:
        raise ValueError("Invalid pillar label tables: " + "; ".join(errors))


validate_pillar_specs(PILLAR_SPECS, LABEL_SYNONYMS)

import math
import re
from typing import Any, Dict, Mapping, Optional

from pillars import DomainSpec, get_spec

NUMBER_PATTERN = re.compile(r"-?\d+(?:[.,]\d+)?")


def parse_number(raw: Any) -> Optional[float]:
    """Parse a numeric token, accepting a comma as the decimal separator."""
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        value = float(raw)
        return value if math.isfinite(value) else None
    if not isinstance(raw, str):
        return None
    match = NUMBER_PATTERN.search(raw.strip())
    if not match:
        return None
    try:
        value = float(match.group(0).replace(",", "."))
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _round_half_up(value: float) -> float:
    return math.floor(value + 0.5)


def normalize_score(value: float, domain: DomainSpec) -> float:
    """Snap ``value`` onto the domain grid and clamp it into range."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return float(domain.minimum)
    if math.isinf(value):
        return float(domain.maximum if value > 0 else domain.minimum)

    # round() first so 7.45 / 0.1 lands on 74.5 rather than 74.4999...
    units = round(value / domain.step, 9)
    snapped = _round_half_up(units) * domain.step
    snapped = round(snapped, domain.decimals)
    return float(max(domain.minimum, min(domain.maximum, snapped)))


def normalize_scores(raw: Mapping[str, float], pillar) -> Dict[str, float]:
    """Return ``raw`` with every field of ``pillar`` normalized; unknown keys are dropped."""
    spec = get_spec(pillar)
    normalized: Dict[str, float] = {}
    for field in spec.fields:
        if field not in raw or raw[field] is None:
            continue
        normalized[field] = normalize_score(raw[field], spec.domain)
    return normalized

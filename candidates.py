"""Label-anchored numeric candidate scanning and disambiguation."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from config import ExtractionConfig
from normalization import NUMBER_PATTERN, parse_number
from pillars import DomainSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NumericCandidate:
    value: float
    distance: int


@dataclass(frozen=True)
class CandidateWeights:
    """Penalty weights for candidate scoring. Lower total score wins."""

    out_of_domain: float = ExtractionConfig.OUT_OF_DOMAIN_PENALTY
    decoy: float = ExtractionConfig.DECOY_PENALTY
    low_value: float = ExtractionConfig.LOW_VALUE_PENALTY
    decoy_values: Tuple[float, ...] = ExtractionConfig.DECOY_VALUES


DEFAULT_WEIGHTS = CandidateWeights()


def _label_pattern(labels: Iterable[str]) -> Optional[re.Pattern]:
    # Longest first so "individualista" wins over "individual" at the same offset.
    cleaned = sorted({label.strip() for label in labels if label and label.strip()}, key=len, reverse=True)
    if not cleaned:
        return None
    return re.compile("|".join(re.escape(label) for label in cleaned), re.IGNORECASE)


def labeled_windows(
    text: str,
    labels: Sequence[str],
    window_size: int = ExtractionConfig.WINDOW_SIZE,
    stop_labels: Optional[Sequence[str]] = None,
) -> List[Tuple[int, str]]:
    """
    Return ``(start, window)`` for every label occurrence in ``text``.

    Each window begins at the label occurrence and spans ``window_size``
    characters, cut short at the earliest stop label found after the label
    text itself.
    """
    if not text:
        return []
    pattern = _label_pattern(labels)
    if pattern is None:
        return []
    stop_pattern = _label_pattern(stop_labels or ())

    windows: List[Tuple[int, str]] = []
    seen_starts = set()
    for match in pattern.finditer(text):
        start = match.start()
        if start in seen_starts:
            continue
        seen_starts.add(start)

        end = min(len(text), start + max(0, window_size))
        if stop_pattern is not None:
            stop = stop_pattern.search(text, match.end(), end)
            if stop:
                end = stop.start()
        windows.append((start, text[start:end]))
    return windows


def scan_candidates(
    text: str,
    labels: Sequence[str],
    window_size: int = ExtractionConfig.WINDOW_SIZE,
    stop_labels: Optional[Sequence[str]] = None,
) -> List[NumericCandidate]:
    """Collect every number following any occurrence of any label."""

    candidates: List[NumericCandidate] = []
    for _start, window in labeled_windows(text, labels, window_size, stop_labels):
        for token in NUMBER_PATTERN.finditer(window):
            value = parse_number(token.group(0))
            if value is None:
                continue
            candidates.append(NumericCandidate(value=value, distance=token.start()))
    return candidates


def candidate_score(
    candidate: NumericCandidate,
    domain: DomainSpec,
    has_alternative: bool,
    weights: CandidateWeights = DEFAULT_WEIGHTS,
) -> float:
    penalty = 0.0
    if not domain.contains(candidate.value):
        penalty += weights.out_of_domain
    if has_alternative and candidate.value in weights.decoy_values:
        penalty += weights.decoy
    if candidate.value <= domain.low_value_ceiling:
        penalty += weights.low_value
    return candidate.distance + penalty


def pick_best_candidate(
    candidates: Sequence[NumericCandidate],
    domain: DomainSpec,
    weights: CandidateWeights = DEFAULT_WEIGHTS,
) -> Optional[float]:
    """
    Choose the most plausible value among ``candidates``.

    Scale markers (100) and gridline midpoints (50) are often printed closer to
    a label than the real data point. They are only penalized when an
    in-domain, non-decoy alternative exists, so a lone decoy is still accepted.
    """
    if not candidates:
        return None

    has_alternative = any(
        domain.contains(c.value) and c.value not in weights.decoy_values for c in candidates
    )
    # min() keeps the first of equally scored candidates, i.e. scan order.
    best = min(candidates, key=lambda c: candidate_score(c, domain, has_alternative, weights))
    return best.value


def find_labeled_number(
    text: str,
    labels: Sequence[str],
    domain: DomainSpec,
    window_size: int = ExtractionConfig.WINDOW_SIZE,
    stop_labels: Optional[Sequence[str]] = None,
    weights: CandidateWeights = DEFAULT_WEIGHTS,
) -> Optional[float]:
    candidates = scan_candidates(text, labels, window_size=window_size, stop_labels=stop_labels)
    picked = pick_best_candidate(candidates, domain, weights)
    if picked is not None:
        label = labels[0] if labels else "?"
        logger.debug(f"Picked {picked} for {label} from {len(candidates)} candidates")
    return picked

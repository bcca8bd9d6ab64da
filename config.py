"""
Extraction Configuration

Tunable constants for the behavioral report extraction engine. The penalty
weights and window sizes were calibrated against sample Innermetrix exports;
override them through the environment when validating against a new corpus.
"""

import os
from typing import Tuple

try:
    from dotenv import load_dotenv

    load_dotenv()
except ImportError:
    pass


def _float_tuple(raw: str) -> Tuple[float, ...]:
    values = []
    for token in raw.split(","):
        token = token.strip()
        if not token:
            continue
        values.append(float(token))
    return tuple(values)


class ExtractionConfig:
    """Engine-wide defaults used by the scanner, disambiguator and CLI."""

    # Candidate scanning
    WINDOW_SIZE = int(os.getenv("EXTRACT_WINDOW_SIZE", "220"))
    ANCHOR_SPAN = int(os.getenv("EXTRACT_ANCHOR_SPAN", "12000"))

    # Disambiguation penalties (lower score wins)
    OUT_OF_DOMAIN_PENALTY = float(os.getenv("EXTRACT_OUT_OF_DOMAIN_PENALTY", "1000"))
    DECOY_PENALTY = float(os.getenv("EXTRACT_DECOY_PENALTY", "1000"))
    LOW_VALUE_PENALTY = float(os.getenv("EXTRACT_LOW_VALUE_PENALTY", "50"))
    DECOY_VALUES: Tuple[float, ...] = _float_tuple(os.getenv("EXTRACT_DECOY_VALUES", "100,50"))

    # Caller-side policies
    MIN_INPUT_CHARS = int(os.getenv("EXTRACT_MIN_INPUT_CHARS", "50"))
    LOG_DIR = os.getenv("EXTRACT_LOG_DIR", "extraction_logs")

    # Imported reports are stored with this confidence ceiling (0-100)
    IMPORTED_CONFIDENCE_CEILING = int(os.getenv("IMPORTED_CONFIDENCE_CEILING", "95"))
    PROVENANCE_WEIGHTS = {
        "strict": 1.0,
        "loose": 0.7,
        "none": 0.0,
    }

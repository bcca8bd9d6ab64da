"""Base classes for per-pillar extraction strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from models import PillarExtractionResult
from pillars import Pillar, PillarSpec, get_spec


class BaseStrategy(ABC):
    """Shared interface for any extraction strategy."""

    name: str = "base"

    def __init__(self, pillar) -> None:
        self.pillar = Pillar(pillar)
        self.spec: PillarSpec = get_spec(self.pillar)

    @abstractmethod
    def extract(self, text: str) -> Optional[PillarExtractionResult]:
        """Return a found result, or None to let the next strategy try."""

    def __call__(self, text: str) -> Optional[PillarExtractionResult]:
        return self.extract(text)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.pillar.value!r})"

"""Experiment records and bounded histories."""

from __future__ import annotations

import string
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Deque, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

from visual_dna.scoring.quality import QualityReport, QualityTier
from visual_dna.util.rng import RandomSource

T = TypeVar("T")

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_SUFFIX_LENGTH = 9


class ExperimentKind(Enum):
    RANDOM = "random"
    EVOLUTION = "evolution"
    CROSSOVER = "crossover"
    SURPRISE = "surprise"
    CHAOS_MUTATION = "chaos_mutation"
    IMPORTED = "imported"


def new_experiment_id(timestamp: int, rng: RandomSource) -> str:
    """``exp_<ms>_<9 base36 chars>`` drawn from the lab RNG."""
    suffix = "".join(rng.choice(_ID_ALPHABET) for _ in range(_ID_SUFFIX_LENGTH))
    return f"exp_{timestamp}_{suffix}"


@dataclass(frozen=True)
class HistoryEntry:
    """One scored experiment.

    Attributes:
        experiment_id: Unique id (``exp_<ms>_<suffix>``)
        kind: Which experiment produced the genome
        signature: Genome signature at scoring time
        genome: The scored genome (read-only once recorded)
        quality_score: Weighted quality in [0, 1]
        complexity: ``calculate_complexity`` of the genome
        uniqueness: Clamped uniqueness sub-score
        is_surprise: Surprise classification
        surprise_score: Summed surprise contributions in [0, 1]
        reasons: Surprise reasons
        quality_tier: Tier of ``quality_score``
        timestamp: Milliseconds since epoch
        report: Quality sub-scores, when available
    """

    experiment_id: str
    kind: ExperimentKind
    signature: str
    genome: Any
    quality_score: float
    complexity: int
    uniqueness: float
    is_surprise: bool
    surprise_score: float
    reasons: Tuple[str, ...]
    quality_tier: QualityTier
    timestamp: int
    report: Optional[QualityReport] = field(default=None, compare=False)

    def to_dict(self, *, include_genome: bool = True) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.experiment_id,
            "kind": self.kind.value,
            "signature": self.signature,
            "quality_score": self.quality_score,
            "complexity": self.complexity,
            "uniqueness": self.uniqueness,
            "is_surprise": self.is_surprise,
            "surprise_score": self.surprise_score,
            "reasons": list(self.reasons),
            "quality_tier": self.quality_tier.value,
            "timestamp": self.timestamp,
        }
        if self.report is not None:
            data["scores"] = self.report.to_dict()
        if include_genome:
            data["genome"] = self.genome.to_dict()
        return data


class BoundedHistory(Generic[T]):
    """Newest-first list with a fixed capacity.

    ``add`` inserts at the front; once full, the oldest item falls off the
    back. Not thread-safe on its own; ``EvolutionContext`` serializes access.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._items: Deque[T] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._items.maxlen or 0

    def add(self, item: T) -> Optional[T]:
        """Insert ``item`` at the front; return the evicted item, if any."""
        evicted = self._items[-1] if len(self._items) == self._items.maxlen else None
        self._items.appendleft(item)
        return evicted

    def newest(self) -> Optional[T]:
        return self._items[0] if self._items else None

    def to_list(self) -> List[T]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

"""Surprise classification.

A surprise is a genome whose combined quality, complexity jump, novelty and
feature signals clear a fixed bar. Contributions are summed, not averaged:

====================================  =====  ===========================
condition                             bonus  reason
====================================  =====  ===========================
quality > 0.85                        +0.4   "exceptional quality"
complexity > running max * 1.2        +0.3   "complexity breakthrough"
uniqueness > 0.95                     +0.3   "extreme uniqueness"
chaos > 0.8 and quality > 0.6         +0.15  "order within chaos"
quantum effects and quality > 0.7     +0.1   "quantum effect success"
====================================  =====  ===========================

The detector is pure: the updated running maximum is returned in the result
and the caller (``EvolutionContext``) decides whether to store it.
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from visual_dna.config.scoring import DEFAULT_SCORING_CONFIG, SurpriseThresholds
from visual_dna.math_utils import clamp01, finite_or

REASON_EXCEPTIONAL_QUALITY = "exceptional quality"
REASON_COMPLEXITY_BREAKTHROUGH = "complexity breakthrough"
REASON_EXTREME_UNIQUENESS = "extreme uniqueness"
REASON_ORDER_WITHIN_CHAOS = "order within chaos"
REASON_QUANTUM_SUCCESS = "quantum effect success"


@dataclass(frozen=True)
class SurpriseResult:
    """Outcome of surprise detection.

    Attributes:
        is_surprise: Whether the summed contributions exceed the cutoff
        score: Summed contributions, clamped to [0, 1]
        reasons: Reason strings in evaluation order
        running_max_complexity: Running maximum after this evaluation
    """

    is_surprise: bool
    score: float
    reasons: Tuple[str, ...]
    running_max_complexity: float

    @property
    def breakthrough(self) -> bool:
        return REASON_COMPLEXITY_BREAKTHROUGH in self.reasons


class SurpriseDetector:
    def __init__(self, thresholds: Optional[SurpriseThresholds] = None) -> None:
        self.thresholds = thresholds or DEFAULT_SCORING_CONFIG.surprise

    def detect(
        self,
        *,
        quality: float,
        complexity: float,
        uniqueness: float,
        chaos_level: float,
        quantum_effects: bool,
        running_max_complexity: float,
    ) -> SurpriseResult:
        """Classify one scored genome.

        Identical inputs always give identical results; no randomness.
        """
        t = self.thresholds
        quality = clamp01(quality)
        uniqueness = finite_or(uniqueness, 0.0)
        chaos_level = clamp01(chaos_level)
        complexity = finite_or(complexity, 0.0)
        running_max = finite_or(running_max_complexity, 0.0)

        total = 0.0
        reasons = []

        if quality > t.exceptional_quality:
            total += t.exceptional_quality_bonus
            reasons.append(REASON_EXCEPTIONAL_QUALITY)

        if complexity > running_max * t.complexity_breakthrough_factor:
            total += t.complexity_breakthrough_bonus
            reasons.append(REASON_COMPLEXITY_BREAKTHROUGH)
            running_max = complexity

        if uniqueness > t.extreme_uniqueness:
            total += t.extreme_uniqueness_bonus
            reasons.append(REASON_EXTREME_UNIQUENESS)

        if chaos_level > t.chaos_order_level and quality > t.chaos_order_quality:
            total += t.chaos_order_bonus
            reasons.append(REASON_ORDER_WITHIN_CHAOS)

        if quantum_effects and quality > t.quantum_quality:
            total += t.quantum_bonus
            reasons.append(REASON_QUANTUM_SUCCESS)

        return SurpriseResult(
            is_surprise=total > t.surprise_cutoff,
            score=clamp01(total),
            reasons=tuple(reasons),
            running_max_complexity=running_max,
        )

    def detect_genome(
        self,
        genome: Any,
        *,
        quality: float,
        complexity: float,
        uniqueness: float,
        running_max_complexity: float,
    ) -> SurpriseResult:
        """``detect`` with chaos level and quantum flag read from ``genome``."""
        return self.detect(
            quality=quality,
            complexity=complexity,
            uniqueness=uniqueness,
            chaos_level=genome.chaos.chaos_level,
            quantum_effects=genome.chaos.has_quantum_effects,
            running_max_complexity=running_max_complexity,
        )

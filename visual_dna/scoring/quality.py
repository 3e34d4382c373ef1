"""Heuristic quality scoring.

The quality score is a weighted sum of five sub-scores, each clamped to
[0, 1] before weighting:

- complexity: observed complexity relative to ``complexity_scale``
- color harmony: primary/secondary contrast plus saturation and brightness
- motion flow: speed, trajectory character and physics flags
- visual balance: shape complexity, symmetry and effect mix
- uniqueness: novelty against recent signatures (see ``uniqueness.py``)

Non-finite inputs are clamped rather than propagated, so a score is never NaN.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence

from visual_dna.color import rgb_distance
from visual_dna.config.scoring import DEFAULT_SCORING_CONFIG, QualityTiers, ScoringConfig
from visual_dna.math_utils import clamp01, finite_or
from visual_dna.scoring.uniqueness import UniquenessEvaluator

MAX_RGB_DISTANCE = 441.0

MOTION_FLOW_SCORES: Dict[str, float] = {
    "straight": 0.3,
    "wave": 0.7,
    "spiral": 0.8,
    "orbit": 0.6,
    "chaotic": 0.9,
}
DEFAULT_MOTION_FLOW_SCORE = 0.5


class QualityTier(Enum):
    EXCELLENT = "EXCELLENT"
    GOOD = "GOOD"
    ACCEPTABLE = "ACCEPTABLE"
    POOR = "POOR"
    FAILED = "FAILED"


def quality_tier(score: float, tiers: QualityTiers = DEFAULT_SCORING_CONFIG.tiers) -> QualityTier:
    """Map a quality score onto its tier (lower bounds are inclusive)."""
    score = clamp01(score)
    if score >= tiers.excellent:
        return QualityTier.EXCELLENT
    if score >= tiers.good:
        return QualityTier.GOOD
    if score >= tiers.acceptable:
        return QualityTier.ACCEPTABLE
    if score >= tiers.poor:
        return QualityTier.POOR
    return QualityTier.FAILED


def calculate_complexity(genome: Any) -> int:
    """Standalone structural complexity, floored to an integer.

    ``10*shape.complexity + 2*particle.count + 10 (glow) + 15 (gravity)
    + 20*chaos_level``. Non-finite components count as zero.
    """
    complexity = 0.0
    complexity += finite_or(genome.shape.complexity, 0.0) * 10
    complexity += finite_or(genome.particle.count, 0.0) * 2
    complexity += 10 if genome.fx.has_glow else 0
    complexity += 15 if genome.motion.has_gravity else 0
    complexity += finite_or(genome.chaos.chaos_level, 0.0) * 20
    return math.floor(complexity)


def complexity_score(observed_complexity: float, scale: float = 100.0) -> float:
    return clamp01(min(finite_or(observed_complexity, 0.0) / scale, 1.0))


def color_harmony_score(genome: Any) -> float:
    color = genome.color
    distance = rgb_distance(color.primary.rgb(), color.secondary.rgb())
    contrast = clamp01(finite_or(distance, 0.0) / MAX_RGB_DISTANCE)
    saturation = clamp01(min(color.saturation, 1.0))
    brightness = clamp01(min(color.brightness, 1.0))
    return clamp01(0.5 * contrast + 0.3 * saturation + 0.2 * brightness)


def motion_flow_score(genome: Any) -> float:
    """Average of speed, trajectory lookup and physics realism."""
    motion = genome.motion
    speed = clamp01(min(finite_or(motion.speed, 0.0) / 200, 1.0))
    trajectory = MOTION_FLOW_SCORES.get(motion.trajectory, DEFAULT_MOTION_FLOW_SCORE)
    physics = 0.0
    if motion.has_gravity:
        physics += 0.3
    if motion.has_bounce:
        physics += 0.2
    return clamp01((speed + trajectory + clamp01(physics)) / 3)


def visual_balance_score(genome: Any) -> float:
    """Average of shape complexity, symmetry and effect balance."""
    shape = genome.shape
    fx = genome.fx
    complexity = clamp01(min(finite_or(shape.complexity, 0.0) / 10, 1.0))
    symmetry = clamp01(min(finite_or(shape.symmetry, 0.0) / 8, 1.0))
    effects = 0.0
    if fx.has_glow:
        effects += 0.2
    if fx.has_blur:
        effects += 0.1
    if fx.has_distortion:
        effects += 0.1
    return clamp01((complexity + symmetry + clamp01(effects)) / 3)


@dataclass(frozen=True)
class QualityReport:
    """Sub-scores (each in [0, 1]) and the weighted total."""

    complexity: float
    color_harmony: float
    motion_flow: float
    visual_balance: float
    uniqueness: float
    total: float

    @property
    def tier(self) -> QualityTier:
        return quality_tier(self.total)

    def to_dict(self) -> Dict[str, float]:
        return {
            "complexity": self.complexity,
            "color_harmony": self.color_harmony,
            "motion_flow": self.motion_flow,
            "visual_balance": self.visual_balance,
            "uniqueness": self.uniqueness,
            "total": self.total,
        }


class QualityScorer:
    """Weighted quality score over five sub-evaluations.

    Args:
        config: Weights and scales (uses default if None)
        uniqueness_evaluator: Novelty scorer (one is created if None)
    """

    def __init__(
        self,
        config: Optional[ScoringConfig] = None,
        uniqueness_evaluator: Optional[UniquenessEvaluator] = None,
    ) -> None:
        self.config = config or DEFAULT_SCORING_CONFIG
        self.uniqueness_evaluator = uniqueness_evaluator or UniquenessEvaluator(self.config)

    def evaluate(
        self,
        genome: Any,
        observed_complexity: Optional[float] = None,
        *,
        history: Sequence[str] = (),
        uniqueness: Optional[float] = None,
    ) -> QualityReport:
        """Score a genome and return every sub-score.

        Args:
            genome: Genome to score
            observed_complexity: Complexity to score; ``calculate_complexity``
                is used when omitted
            history: Prior signatures for the uniqueness sub-score
            uniqueness: Precomputed uniqueness (skips the history comparison)
        """
        if observed_complexity is None:
            observed_complexity = calculate_complexity(genome)
        if uniqueness is None:
            uniqueness = self.uniqueness_evaluator.uniqueness(genome, history)

        weights = self.config.weights
        sub_complexity = complexity_score(observed_complexity, self.config.complexity_scale)
        sub_color = color_harmony_score(genome)
        sub_motion = motion_flow_score(genome)
        sub_balance = visual_balance_score(genome)
        sub_unique = clamp01(uniqueness)

        total = clamp01(
            sub_complexity * weights.complexity
            + sub_color * weights.color_harmony
            + sub_motion * weights.motion_flow
            + sub_balance * weights.visual_balance
            + sub_unique * weights.uniqueness
        )
        return QualityReport(
            complexity=sub_complexity,
            color_harmony=sub_color,
            motion_flow=sub_motion,
            visual_balance=sub_balance,
            uniqueness=sub_unique,
            total=total,
        )

    def score(
        self,
        genome: Any,
        observed_complexity: Optional[float] = None,
        *,
        history: Sequence[str] = (),
        uniqueness: Optional[float] = None,
    ) -> float:
        """Weighted quality in [0, 1]."""
        return self.evaluate(
            genome, observed_complexity, history=history, uniqueness=uniqueness
        ).total

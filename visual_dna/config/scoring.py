"""Scoring weights and thresholds.

The numeric constants here were tuned against the look of the generated
effects; change them together or not at all.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class QualityWeights:
    complexity: float = 0.20
    color_harmony: float = 0.25
    motion_flow: float = 0.20
    visual_balance: float = 0.20
    uniqueness: float = 0.15


@dataclass(frozen=True)
class QualityTiers:
    """Lower bounds for each quality tier (score >= bound)."""

    excellent: float = 0.8
    good: float = 0.6
    acceptable: float = 0.4
    poor: float = 0.2


@dataclass(frozen=True)
class SurpriseThresholds:
    """Thresholds and contributions used by the surprise detector."""

    exceptional_quality: float = 0.85
    exceptional_quality_bonus: float = 0.4
    complexity_breakthrough_factor: float = 1.2
    complexity_breakthrough_bonus: float = 0.3
    extreme_uniqueness: float = 0.95
    extreme_uniqueness_bonus: float = 0.3
    chaos_order_level: float = 0.8
    chaos_order_quality: float = 0.6
    chaos_order_bonus: float = 0.15
    quantum_quality: float = 0.7
    quantum_bonus: float = 0.1
    surprise_cutoff: float = 0.7


@dataclass(frozen=True)
class ScoringConfig:
    """Full scoring configuration.

    Attributes:
        weights: Weights of the five quality sub-scores (sum to 1.0).
        tiers: Quality tier boundaries.
        surprise: Surprise detector thresholds.
        similarity_threshold: Signatures above this similarity count as "similar".
        chaos_uniqueness_bonus: Multiplier on chaos level added to uniqueness.
        complexity_scale: Observed complexity that maps to a full complexity score.
    """

    weights: QualityWeights = field(default_factory=QualityWeights)
    tiers: QualityTiers = field(default_factory=QualityTiers)
    surprise: SurpriseThresholds = field(default_factory=SurpriseThresholds)
    similarity_threshold: float = 0.8
    chaos_uniqueness_bonus: float = 0.3
    complexity_scale: float = 100.0


DEFAULT_SCORING_CONFIG = ScoringConfig()

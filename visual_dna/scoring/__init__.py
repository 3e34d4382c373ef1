"""Quality, uniqueness and surprise scoring."""

from visual_dna.scoring.quality import (
    QualityReport,
    QualityScorer,
    QualityTier,
    calculate_complexity,
    quality_tier,
)
from visual_dna.scoring.surprise import SurpriseDetector, SurpriseResult
from visual_dna.scoring.uniqueness import (
    UniquenessEvaluator,
    genome_signature,
    levenshtein,
    similarity,
)

__all__ = [
    "QualityReport",
    "QualityScorer",
    "QualityTier",
    "SurpriseDetector",
    "SurpriseResult",
    "UniquenessEvaluator",
    "calculate_complexity",
    "genome_signature",
    "levenshtein",
    "quality_tier",
    "similarity",
]

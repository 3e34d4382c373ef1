"""Novelty scoring by signature edit distance.

A genome's signature is a compact string (shape, primary color, speed, chaos)
compared against prior signatures with normalized Levenshtein similarity.
"""

import math
from typing import Any, Iterable, Sequence

from visual_dna.config.scoring import DEFAULT_SCORING_CONFIG, ScoringConfig
from visual_dna.math_utils import finite_or, format_number


def genome_signature(genome: Any) -> str:
    """Build ``"{shape}-{r}{g}{b}-S{speed}-C{chaos%}"`` for a genome.

    Speed uses ``format_number`` (e.g. ``S100`` or ``S100.40``).
    """
    color = genome.color.primary
    speed = finite_or(genome.motion.speed, 0.0)
    chaos = math.floor(finite_or(genome.chaos.chaos_level, 0.0) * 100)
    return (
        f"{genome.shape.core_shape}-{color.r}{color.g}{color.b}"
        f"-S{format_number(speed)}-C{chaos}"
    )


def levenshtein(a: str, b: str) -> int:
    """Edit distance with unit-cost insert, delete and substitute (full DP)."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(
                min(
                    previous[j] + 1,  # deletion
                    current[j - 1] + 1,  # insertion
                    previous[j - 1] + cost,  # substitution
                )
            )
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """``1 - levenshtein / max(len)``; 0.0 when either string is empty."""
    if not a or not b:
        return 0.0
    return 1.0 - levenshtein(a, b) / max(len(a), len(b))


class UniquenessEvaluator:
    """Scores how different a genome is from previously seen signatures."""

    def __init__(self, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> None:
        self.config = config

    def count_similar(self, signature: str, history: Iterable[str]) -> int:
        threshold = self.config.similarity_threshold
        return sum(1 for other in history if similarity(signature, other) > threshold)

    def uniqueness(self, genome: Any, history: Sequence[str]) -> float:
        """Novelty score plus a chaos bonus.

        The result is NOT clamped; the quality scorer clamps it. With an
        empty history the base novelty is 1.0.
        """
        signature = genome_signature(genome)
        similar = self.count_similar(signature, history)
        base = max(0.0, 1.0 - similar / max(len(history), 1))
        chaos = finite_or(genome.chaos.chaos_level, 0.0)
        return base + self.config.chaos_uniqueness_bonus * chaos

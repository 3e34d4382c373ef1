"""Lab-wide settings for experiments and history bookkeeping."""

import os
from dataclasses import dataclass

from visual_dna.exceptions import ConfigurationError

# Bounded experiment/surprise history sizes
DEFAULT_HISTORY_SIZE = 10

# Evolution experiments never mutate below this rate
MIN_EVOLUTION_MUTATION_RATE = 0.5

# Upper bounds used when applying lab settings to a fresh genome
MAX_SHAPE_COMPLEXITY = 10
MAX_PARTICLE_COUNT = 50
PARTICLES_PER_COMPLEXITY = 5


@dataclass
class LabSettings:
    """User-tunable knobs applied to freshly generated genomes.

    Attributes:
        complexity: Target shape complexity (1-10); also drives particle count.
        chaos_level: Floor for the genome's chaos level (0.0-1.0).
        mutation_rate: Base mutation rate for evolution experiments (0.0-1.0).
        max_history_size: Cap for the full experiment history.
        max_surprise_size: Cap for the surprise-only history.
        apply_to_new_genomes: Whether random experiments apply these settings.
    """

    complexity: int = 5
    chaos_level: float = 0.5
    mutation_rate: float = 0.3
    max_history_size: int = DEFAULT_HISTORY_SIZE
    max_surprise_size: int = DEFAULT_HISTORY_SIZE
    apply_to_new_genomes: bool = True

    def __post_init__(self) -> None:
        if self.max_history_size < 1 or self.max_surprise_size < 1:
            raise ConfigurationError("history sizes must be at least 1")
        self.complexity = max(1, min(MAX_SHAPE_COMPLEXITY, int(self.complexity)))
        self.chaos_level = max(0.0, min(1.0, float(self.chaos_level)))
        self.mutation_rate = max(0.0, min(1.0, float(self.mutation_rate)))

    @property
    def evolution_mutation_rate(self) -> float:
        return max(self.mutation_rate, MIN_EVOLUTION_MUTATION_RATE)

    @classmethod
    def from_env(cls) -> "LabSettings":
        """Build settings from ``VISUAL_DNA_*`` environment variables."""
        try:
            history = int(os.getenv("VISUAL_DNA_HISTORY_SIZE", str(DEFAULT_HISTORY_SIZE)))
            surprises = int(os.getenv("VISUAL_DNA_SURPRISE_SIZE", str(history)))
            return cls(
                complexity=int(os.getenv("VISUAL_DNA_COMPLEXITY", "5")),
                chaos_level=float(os.getenv("VISUAL_DNA_CHAOS_LEVEL", "0.5")),
                mutation_rate=float(os.getenv("VISUAL_DNA_MUTATION_RATE", "0.3")),
                max_history_size=history,
                max_surprise_size=surprises,
            )
        except ValueError as exc:
            raise ConfigurationError(f"Invalid VISUAL_DNA_* setting: {exc}") from exc

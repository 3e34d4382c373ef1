"""Genetic operators: mutation and crossover.

Both operators return new genomes, never modify their inputs, and re-run the
invariant enforcer before returning.
"""

from visual_dna.evolution.crossover import crossover_genomes
from visual_dna.evolution.mutation import (
    DEFAULT_MUTATION_CONFIG,
    MutationConfig,
    mutate_genome,
    perturb_numeric,
)

__all__ = [
    "crossover_genomes",
    "mutate_genome",
    "perturb_numeric",
    "MutationConfig",
    "DEFAULT_MUTATION_CONFIG",
]

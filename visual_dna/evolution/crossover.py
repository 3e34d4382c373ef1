"""Crossover operator for genomes.

Uniform crossover: for every gene of every group a fair coin decides whether
the child takes parent A's or parent B's value. Values are never blended; a
color gene is inherited whole.
"""

import logging
from typing import List, Optional

from visual_dna.genetics.gene import GeneSpec, Rgba
from visual_dna.genetics.genome import Genome
from visual_dna.genetics.groups import GENE_GROUPS
from visual_dna.genetics.invariants import enforce_invariants
from visual_dna.genetics.lineage import LineageRecord, now_ms
from visual_dna.util.rng import RandomSource, require_rng_param

logger = logging.getLogger(__name__)


def crossover_group(
    specs: List[GeneSpec],
    child_group: object,
    group_a: object,
    group_b: object,
    rng: RandomSource,
) -> None:
    """Fill ``child_group`` in place with one parent's value per gene."""
    for spec in specs:
        source = group_a if rng.random() > 0.5 else group_b
        value = getattr(source, spec.name)
        if isinstance(value, Rgba):
            value = value.copy()
        setattr(child_group, spec.name, value)


def crossover_genomes(
    parent_a: Genome,
    parent_b: Genome,
    *,
    rng: Optional[RandomSource] = None,
) -> Genome:
    """Produce a child genome by uniform per-gene inheritance.

    Args:
        parent_a: First parent
        parent_b: Second parent
        rng: Random source (required)

    Returns:
        Child with ``generation = max(parents) + 1`` and a lineage reset to a
        single crossover record naming both parents' signature tails.
    """
    rng = require_rng_param(rng, "crossover_genomes")

    child = parent_a.copy()
    for name, (_cls, specs) in GENE_GROUPS.items():
        crossover_group(specs, getattr(child, name), getattr(parent_a, name), getattr(parent_b, name), rng)

    enforce_invariants(child, rng)

    child.generation = max(parent_a.generation, parent_b.generation) + 1
    child.timestamp = now_ms()
    child.lineage = [
        LineageRecord.crossover(
            child.generation, (parent_a.signature, parent_b.signature), child.timestamp
        )
    ]
    child.entropy = None
    child.quality_score = 0.0
    child.is_usable = True

    logger.debug("Crossover produced generation %d: %s", child.generation, child.signature)
    return child

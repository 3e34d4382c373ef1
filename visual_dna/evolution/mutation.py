"""Mutation operator for genomes.

Mutation walks every field of every gene group and, with probability equal to
the mutation rate, perturbs it according to the field's declared kind:

- Numeric genes: additive noise whose width depends on the semantic
  (color channel, alpha, ratio, size, speed, other)
- Boolean genes: resampled, true with probability 0.7
- Enum genes: resampled uniformly when declared ``resample``; otherwise kept
- Color genes: every channel is visited as its own field

The variance constants are empirically tuned and kept literally; the rest of
the lab (scoring thresholds, surprise rates) is calibrated against them.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from visual_dna.genetics.gene import (
    COLOR_CHANNELS,
    BooleanGene,
    ColorGene,
    EnumGene,
    NumericGene,
    NumericSemantic,
    Rgba,
)
from visual_dna.genetics.genome import Genome
from visual_dna.genetics.groups import GENE_GROUPS
from visual_dna.genetics.invariants import enforce_invariants
from visual_dna.genetics.lineage import LineageRecord, extend_lineage, now_ms
from visual_dna.math_utils import clamp, clamp01, js_round
from visual_dna.util.rng import RandomSource, require_rng_param

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MutationConfig:
    """Perturbation constants per numeric semantic.

    Color channels and 0-1 values draw their noise width uniformly from
    ``[base, base + spread)``. Magnitude-scaled semantics use
    ``|old| * scale + offset``.
    """

    channel_base: float = 60.0
    channel_spread: float = 120.0
    unit_base: float = 0.3
    unit_spread: float = 0.4
    size_scale: float = 0.8
    size_offset: float = 20.0
    min_size: float = 1.0
    speed_scale: float = 1.0
    speed_offset: float = 15.0
    other_scale: float = 0.6
    other_offset: float = 25.0
    # Booleans resample to True when a draw exceeds this (P(True) = 0.7)
    boolean_threshold: float = 0.3


DEFAULT_MUTATION_CONFIG = MutationConfig()


def perturb_numeric(
    old: float,
    semantic: NumericSemantic,
    rng: RandomSource,
    config: MutationConfig = DEFAULT_MUTATION_CONFIG,
) -> float:
    """Apply one semantic-aware perturbation to a numeric value.

    Returns ``old`` unchanged if the perturbation would not be finite.
    """
    if semantic is NumericSemantic.COLOR_CHANNEL:
        variance = config.channel_base + rng.random() * config.channel_spread
        value = clamp(old + (rng.random() - 0.5) * variance, 0, 255)
    elif semantic in (NumericSemantic.ALPHA, NumericSemantic.RATIO):
        variance = config.unit_base + rng.random() * config.unit_spread
        value = clamp01(old + (rng.random() - 0.5) * variance)
    elif semantic is NumericSemantic.SIZE:
        variance = abs(old) * config.size_scale + config.size_offset
        value = max(config.min_size, old + (rng.random() - 0.5) * variance)
    elif semantic is NumericSemantic.SPEED:
        variance = abs(old) * config.speed_scale + config.speed_offset
        value = old + (rng.random() - 0.5) * variance
    elif semantic is NumericSemantic.OTHER:
        variance = abs(old) * config.other_scale + config.other_offset
        value = old + (rng.random() - 0.5) * variance
    else:
        raise ValueError(f"Unknown numeric semantic: {semantic!r}")

    if not math.isfinite(value):
        return old
    return value


def _mutate_color(
    color: Rgba, spec: ColorGene, rate: float, rng: RandomSource, config: MutationConfig
) -> Rgba:
    mutated = color.copy()
    for channel in COLOR_CHANNELS:
        if rng.random() < rate:
            value = perturb_numeric(getattr(mutated, channel), NumericSemantic.COLOR_CHANNEL, rng, config)
            setattr(mutated, channel, int(clamp(js_round(value), 0, 255)))
    if spec.has_alpha and rng.random() < rate:
        mutated.a = perturb_numeric(mutated.a, NumericSemantic.ALPHA, rng, config)
    return mutated


def mutate_group(
    specs: list,
    group: object,
    rate: float,
    rng: RandomSource,
    config: MutationConfig = DEFAULT_MUTATION_CONFIG,
) -> None:
    """Mutate a gene group in place, one trigger draw per field."""
    for spec in specs:
        if isinstance(spec, ColorGene):
            setattr(group, spec.name, _mutate_color(getattr(group, spec.name), spec, rate, rng, config))
            continue

        if rng.random() >= rate:
            continue

        if isinstance(spec, NumericGene):
            value = perturb_numeric(getattr(group, spec.name), spec.semantic, rng, config)
            setattr(group, spec.name, js_round(value) if spec.integral else value)
        elif isinstance(spec, BooleanGene):
            setattr(group, spec.name, rng.random() > config.boolean_threshold)
        elif isinstance(spec, EnumGene):
            if spec.resample:
                setattr(group, spec.name, rng.choice(spec.choices))
        else:
            raise TypeError(f"Unknown gene spec: {spec!r}")


def mutate_genome(
    genome: Genome,
    rate: float = 0.3,
    *,
    rng: Optional[RandomSource] = None,
    config: Optional[MutationConfig] = None,
) -> Genome:
    """Return a mutated copy of ``genome``; the input is not modified.

    Args:
        genome: Parent genome
        rate: Per-field mutation probability (clamped to [0, 1])
        rng: Random source (required)
        config: Perturbation constants (uses default if None)

    Returns:
        Child genome with ``generation + 1`` and a lineage tail of at most
        three records, already satisfying the effect invariant.
    """
    rng = require_rng_param(rng, "mutate_genome")
    config = config or DEFAULT_MUTATION_CONFIG
    rate = clamp01(rate)

    child = genome.copy()
    for name, (_cls, specs) in GENE_GROUPS.items():
        mutate_group(specs, getattr(child, name), rate, rng, config)

    enforce_invariants(child, rng)

    child.generation = genome.generation + 1
    child.timestamp = now_ms()
    child.lineage = extend_lineage(
        genome.lineage, LineageRecord.mutation(child.generation, rate, child.timestamp)
    )
    child.entropy = None
    child.quality_score = 0.0
    child.is_usable = True

    logger.debug("Mutated genome (generation %d, rate %.2f): %s", child.generation, rate, child.signature)
    return child

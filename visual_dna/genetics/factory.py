"""Deterministic genome generation from a chaos seed.

Every gene group is derived from its own sub-seed ``seed * k`` with a
distinct constant ``k`` per group. Fields map from the sub-seed by modulo and
range arithmetic only, so the same seed always yields the same genes.

Example:
    >>> genome = from_seed(42)
    >>> genome.shape.core_shape
    'circle'
"""

import logging
import math
from typing import Dict, Optional, Sequence, TypeVar

from visual_dna.entropy import CHAOS_SEED_MODULUS, EntropyRecord
from visual_dna.genetics.genome import Genome
from visual_dna.genetics.genome_codec import NEUTRAL_SEED
from visual_dna.genetics.groups import (
    ATTRACTORS,
    BLEND_MODES,
    COMBINATION_TYPES,
    DISSIPATION_STYLES,
    DISTORTION_TYPES,
    ELEMENTS,
    ENERGY_FIELD_TYPES,
    EVOLUTION_BIASES,
    FLIGHT_STYLES,
    GENERATION_STYLES,
    IMPACT_STYLES,
    LAUNCH_STYLES,
    MATERIAL_TYPES,
    PARTICLE_BEHAVIORS,
    PARTICLE_MATERIALS,
    SHAPES,
    SPELL_TYPES,
    TRAJECTORIES,
    ChaosGenes,
    ColorGenes,
    ComplexGenes,
    EffectGenes,
    ElementalGenes,
    EvolutionGenes,
    MaterialGenes,
    MotionGenes,
    ParticleGenes,
    ShapeGenes,
    StageGenes,
)
from visual_dna.genetics.invariants import enforce_invariants
from visual_dna.genetics.lineage import now_ms
from visual_dna.genetics.palettes import build_palette, elemental_colors
from visual_dna.math_utils import clamp01
from visual_dna.util.rng import derived_rng

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_COHERENCE = 0.5

# Sub-seed multiplier per gene group (all distinct)
SUB_SEED_FACTORS: Dict[str, float] = {
    "elemental": 0.6,
    "complex": 0.7,
    "stage": 0.8,
    "material": 0.9,
    "color": 1.0,
    "shape": 1.1,
    "motion": 1.2,
    "particle": 1.3,
    "fx": 1.4,
    "evolution": 1.5,
    "chaos": 1.618,
}


def normalize_seed(seed: float) -> float:
    """Fold a seed into ``[0, CHAOS_SEED_MODULUS)``.

    Negative seeds use their magnitude and non-finite seeds become 0. Huge
    finite seeds are reduced too, since the sub-seed and palette products
    would otherwise overflow.
    """
    value = abs(float(seed))
    if not math.isfinite(value):
        return 0.0
    return math.fmod(value, CHAOS_SEED_MODULUS)


def _pick(choices: Sequence[T], s: float, factor: float = 0.001) -> T:
    return choices[math.floor(s * factor) % len(choices)]


def _ratio(s: float, modulus: int = 100, divisor: float = 100) -> float:
    return (s % modulus) / divisor


def color_genes(s: float, coherence: float = DEFAULT_COHERENCE) -> ColorGenes:
    palette = build_palette(s, coherence)
    return ColorGenes(
        primary=palette.primary,
        secondary=palette.secondary,
        accent=palette.accent,
        background=palette.background,
        is_shifting=(s % 13) > 6,
        shift_speed=_ratio(s),
        blend_mode=_pick(BLEND_MODES, s),
        saturation=0.3 + _ratio(s, 70),
        brightness=0.4 + _ratio(s, 60),
        has_aura=(s % 7) == 0,
        is_quantum=(s % 17) == 0,
        is_pulsing=(s % 11) > 5,
    )


def shape_genes(s: float) -> ShapeGenes:
    return ShapeGenes(
        core_shape=_pick(SHAPES, s),
        core_size=30 + (s % 50),
        complexity=math.floor(1 + (s % 9)),
        symmetry=math.floor(s % 8) + 1,
        is_deforming=(s % 13) > 7,
        deform_speed=_ratio(s, 100, 200),
        deform_intensity=_ratio(s, 50),
        can_split=(s % 17) == 0,
        split_count=math.floor(2 + (s % 4)),
        dimension="3D" if (s % 23) > 15 else "2D",
        depth=_ratio(s),
    )


def motion_genes(s: float) -> MotionGenes:
    return MotionGenes(
        speed=50 + (s % 150),
        acceleration=-50 + (s % 100),
        rotation_speed=-5 + (s % 10),
        rotation_axis_x=s % 2,
        rotation_axis_y=(s * 1.1) % 2,
        rotation_axis_z=(s * 1.2) % 2,
        scaling=0.5 + _ratio(s),
        pulsing=(s % 11) > 5,
        pulse_speed=_ratio(s, 50),
        has_gravity=(s % 13) > 8,
        has_bounce=(s % 17) > 12,
        friction=_ratio(s, 50, 1000),
        time_distortion=(s % 23) == 0,
        space_warping=(s % 29) == 0,
        trajectory=_pick(TRAJECTORIES, s),
    )


def particle_genes(s: float) -> ParticleGenes:
    return ParticleGenes(
        count=math.floor(5 + (s % 20)),
        size=2 + (s % 8),
        size_variation=_ratio(s, 50),
        lifespan=1.0 + _ratio(s, 300),
        fade_rate=_ratio(s),
        behavior=_pick(PARTICLE_BEHAVIORS, s),
        cohesion=_ratio(s),
        separation=_ratio(s),
        emission_rate=_ratio(s, 50, 10),
        burst_size=math.floor(1 + (s % 10)),
        has_trails=(s % 7) > 3,
        trail_length=_ratio(s),
        is_electric=(s % 13) == 0,
        is_magnetic=(s % 17) == 0,
    )


def fx_genes(s: float) -> EffectGenes:
    return EffectGenes(
        has_glow=(s % 5) > 2,
        glow_intensity=_ratio(s),
        glow_radius=5 + (s % 15),
        has_blur=(s % 7) > 4,
        blur_amount=_ratio(s, 20, 10),
        has_distortion=(s % 11) > 7,
        distortion_type=_pick(DISTORTION_TYPES, s),
        distortion_intensity=_ratio(s, 50),
        has_lighting=(s % 13) > 8,
        lighting_type="point",
        light_intensity=_ratio(s),
        has_time_effect=(s % 17) == 0,
        time_stretch=0.5 + _ratio(s),
        has_space_effect=(s % 19) == 0,
        dimension_shift=_ratio(s, 3, 2),
    )


def evolution_genes(s: float) -> EvolutionGenes:
    return EvolutionGenes(
        mutation_rate=_ratio(s, 50),
        adaptability=_ratio(s),
        stability=_ratio(s),
        evolution_bias=_pick(EVOLUTION_BIASES, s),
        generation_limit=math.floor(5 + (s % 10)),
        can_self_repair=(s % 13) > 9,
        repair_rate=_ratio(s, 50, 1000),
        has_memory=(s % 17) > 12,
        memory_capacity=math.floor(3 + (s % 7)),
    )


def chaos_genes(s: float, coherence: float = DEFAULT_COHERENCE) -> ChaosGenes:
    return ChaosGenes(
        chaos_level=_ratio(s),
        unpredictability=_ratio(s),
        can_random_mutate=(s % 7) > 4,
        mutation_intensity=_ratio(s),
        has_quantum_effects=(s % 11) > 7,
        quantum_coherence=coherence,
        attractor_type=_pick(ATTRACTORS, s),
        attractor_strength=_ratio(s),
        has_nonlinear_dynamics=(s % 13) == 0,
        bifurcation_point=_ratio(s),
    )


def elemental_genes(s: float) -> ElementalGenes:
    primary_element = _pick(ELEMENTS, s)
    colors = elemental_colors(primary_element, s)
    return ElementalGenes(
        primary_element=primary_element,
        secondary_element=_pick(ELEMENTS, s, 0.002),
        elemental_purity=_ratio(s),
        elemental_intensity=0.3 + _ratio(s, 70),
        elemental_stability=_ratio(s),
        primary_color=colors.primary,
        secondary_color=colors.secondary,
        accent_color=colors.accent,
        has_elemental_core=(s % 7) > 4,
        has_elemental_aura=(s % 11) > 6,
        has_elemental_trail=(s % 13) > 8,
        has_elemental_reaction=(s % 17) > 12,
        is_elemental_shifting=(s % 19) > 14,
        elemental_evolution=(s % 23) > 18,
        elemental_resonance=_ratio(s, 50),
        elemental_conflict=_ratio(s, 30),
        dominant_element="none",
    )


def complex_genes(s: float) -> ComplexGenes:
    return ComplexGenes(
        spell_type=_pick(SPELL_TYPES, s),
        layer_count=math.floor(2 + (s % 4)),
        layer_complexity=_ratio(s),
        layer_interaction=_ratio(s),
        combination_type=_pick(COMBINATION_TYPES, s),
        has_spatial_distortion=(s % 7) > 4,
        has_time_distortion=(s % 11) > 7,
        has_reality_rift=(s % 13) > 10,
        has_energy_field=(s % 5) > 2,
        field_radius=30 + (s % 100),
        field_intensity=_ratio(s),
        field_pulsation=_ratio(s),
        geometric_complexity=math.floor(1 + (s % 5)),
        fractional_dimension=2 + _ratio(s),
        morphing_speed=_ratio(s, 100, 200),
        morphing_intensity=_ratio(s),
        has_resonance=(s % 9) > 6,
        resonance_frequency=_ratio(s),
        resonance_amplitude=_ratio(s),
    )


def stage_genes(s: float) -> StageGenes:
    return StageGenes(
        stage_count=math.floor(3 + (s % 3)),
        generation_duration=math.floor(200 + (s % 300)),
        generation_style=_pick(GENERATION_STYLES, s, 0.001),
        generation_intensity=_ratio(s),
        launch_duration=math.floor(100 + (s % 200)),
        launch_style=_pick(LAUNCH_STYLES, s, 0.002),
        launch_force=_ratio(s),
        flight_duration=math.floor(300 + (s % 400)),
        flight_style=_pick(FLIGHT_STYLES, s, 0.005),
        flight_evolution=_ratio(s),
        flight_trail_complexity=math.floor(1 + (s % 4)),
        flight_environment_interaction=_ratio(s),
        impact_duration=math.floor(150 + (s % 250)),
        impact_style=_pick(IMPACT_STYLES, s, 0.003),
        impact_expansion=_ratio(s),
        dissipation_duration=math.floor(300 + (s % 500)),
        dissipation_style=_pick(DISSIPATION_STYLES, s, 0.004),
        dissipation_complexity=_ratio(s),
        stage_transition_smooth=(s % 7) > 3,
        stage_overlap=_ratio(s, 50),
        adaptive_staging=(s % 11) > 7,
        stage_amplification=_ratio(s),
    )


def material_genes(s: float) -> MaterialGenes:
    return MaterialGenes(
        material_type=_pick(MATERIAL_TYPES, s),
        opacity=0.3 + _ratio(s, 70),
        transparency=_ratio(s),
        refractive_index=1.0 + _ratio(s, 50),
        has_emission=(s % 5) > 2,
        emission_intensity=_ratio(s),
        emission_hue=(s * 137.5) % 360,
        emission_saturation=0.7 + _ratio(s, 30),
        emission_lightness=0.5 + _ratio(s, 40),
        emission_pulsation=_ratio(s),
        has_reflection=(s % 7) > 4,
        reflection_intensity=_ratio(s),
        has_iridescence=(s % 11) > 7,
        iridescence_shift=_ratio(s),
        is_dynamic=(s % 9) > 6,
        dynamic_speed=_ratio(s, 100, 200),
        material_flow=_ratio(s),
        has_particle_emission=(s % 13) > 9,
        particle_emission_rate=_ratio(s, 50, 10),
        particle_material_type=_pick(PARTICLE_MATERIALS, s, 0.002),
        has_energy_field=(s % 17) > 12,
        energy_field_type=_pick(ENERGY_FIELD_TYPES, s, 0.003),
        energy_field_intensity=_ratio(s),
        has_distortion=(s % 19) > 14,
        distortion_type=_pick(DISTORTION_TYPES, s),
        distortion_intensity=_ratio(s),
    )


def from_seed(
    seed: float,
    *,
    coherence: Optional[float] = None,
    timestamp: Optional[int] = None,
) -> Genome:
    """Build a genome from a chaos seed.

    Args:
        seed: Chaos seed; negative values use their magnitude, non-finite
            values are treated as 0 and the result is reduced modulo
            ``CHAOS_SEED_MODULUS``
        coherence: Quantum coherence feeding ``chaos.quantum_coherence`` and
            the quantum palette alpha (0.5 when omitted)
        timestamp: Creation time in ms; defaults to now. Gene values never
            depend on it.

    Returns:
        A genome that already satisfies the effect-combination invariant.
        Any conflict is resolved with an RNG derived from the seed, so the
        same seed always yields the same genes.
    """
    seed = normalize_seed(seed)
    if coherence is None or not math.isfinite(coherence):
        coherence = DEFAULT_COHERENCE
    coherence = clamp01(coherence)
    k = SUB_SEED_FACTORS

    genome = Genome(
        elemental=elemental_genes(seed * k["elemental"]),
        complex=complex_genes(seed * k["complex"]),
        stage=stage_genes(seed * k["stage"]),
        material=material_genes(seed * k["material"]),
        color=color_genes(seed * k["color"], coherence),
        shape=shape_genes(seed * k["shape"]),
        motion=motion_genes(seed * k["motion"]),
        particle=particle_genes(seed * k["particle"]),
        fx=fx_genes(seed * k["fx"]),
        evolution=evolution_genes(seed * k["evolution"]),
        chaos=chaos_genes(seed * k["chaos"], coherence),
        timestamp=now_ms() if timestamp is None else timestamp,
    )
    enforce_invariants(genome, derived_rng(seed))
    logger.debug("Generated genome from seed %.3f: %s", seed, genome.signature)
    return genome


def from_entropy(record: EntropyRecord) -> Genome:
    """Build a genome from a collected entropy record and keep the record on it."""
    genome = from_seed(
        record.chaos_seed,
        coherence=record.quantum.coherence,
        timestamp=record.timestamp,
    )
    genome.entropy = record
    return genome


def neutral_genome() -> Genome:
    """Genome supplying codec defaults (``NEUTRAL_SEED``, timestamp 0)."""
    return from_seed(NEUTRAL_SEED, timestamp=0)

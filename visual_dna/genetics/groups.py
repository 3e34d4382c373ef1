"""Gene group containers and their declarative field specifications.

Each gene group is a fixed-shape dataclass paired with a list of gene specs
(``*_GENE_SPECS``). The specs are the single source of truth for which fields
exist, how they mutate and which values are legal.
"""

import dataclasses
from dataclasses import dataclass
from typing import Dict, List, Tuple, Type

from visual_dna.genetics.gene import (
    BooleanGene,
    ColorGene,
    EnumGene,
    GeneSpec,
    NumericGene,
    NumericSemantic,
    Rgba,
)

_RATIO = NumericSemantic.RATIO
_SIZE = NumericSemantic.SIZE
_SPEED = NumericSemantic.SPEED
_OTHER = NumericSemantic.OTHER

# =============================================================================
# Enumerations
# =============================================================================

SHAPES: Tuple[str, ...] = (
    "circle", "star", "diamond", "triangle", "square", "hexagon",
    "spiral", "wave", "crystal", "blob", "fractal", "chaos",
)
BLEND_MODES: Tuple[str, ...] = (
    "normal", "multiply", "screen", "overlay", "soft-light",
    "hard-light", "color-dodge", "color-burn", "difference", "exclusion",
)
DIMENSIONS: Tuple[str, ...] = ("2D", "3D")
TRAJECTORIES: Tuple[str, ...] = ("straight", "wave", "spiral", "orbit", "chaotic")
PARTICLE_BEHAVIORS: Tuple[str, ...] = (
    "explode", "implode", "swirl", "drift", "chase",
    "orbit", "spiral", "bounce", "flow", "chaos",
)
DISTORTION_TYPES: Tuple[str, ...] = ("wave", "ripple", "twist", "bend", "stretch", "shatter")
LIGHTING_TYPES: Tuple[str, ...] = ("point", "ambient", "directional", "spot")
EVOLUTION_BIASES: Tuple[str, ...] = (
    "beauty", "complexity", "efficiency", "chaos", "harmony", "survival",
)
ATTRACTORS: Tuple[str, ...] = ("lorenz", "rossler", "henon", "logistic", "mandelbrot")
ELEMENTS: Tuple[str, ...] = (
    "fire", "ice", "lightning", "shadow", "light", "nature",
    "void", "crystal", "plasma", "quantum",
)
DOMINANT_ELEMENTS: Tuple[str, ...] = (
    "none", "fire", "ice", "lightning", "chaos", "shadow", "holy",
)
SPELL_TYPES: Tuple[str, ...] = ("burst", "continuous", "enhancement", "summoning")
COMBINATION_TYPES: Tuple[str, ...] = (
    "nested", "parallel", "sequential", "spiral", "orbital",
    "interference", "cascade", "explosion", "implosion", "fusion",
)
GENERATION_STYLES: Tuple[str, ...] = (
    "gathering", "crystallization", "summoning", "charging", "materialization",
)
LAUNCH_STYLES: Tuple[str, ...] = ("burst", "acceleration", "teleport", "phase", "eruption")
FLIGHT_STYLES: Tuple[str, ...] = ("linear", "arcing", "homing", "zigzag", "drifting")
IMPACT_STYLES: Tuple[str, ...] = (
    "explosion", "penetration", "spreading", "absorption", "transformation",
)
DISSIPATION_STYLES: Tuple[str, ...] = (
    "fade", "scatter", "absorption", "evaporation", "crystallization",
)
MATERIAL_TYPES: Tuple[str, ...] = (
    "energy", "plasma", "crystal", "liquid", "gas", "ethereal",
    "metallic", "organic", "quantum", "void",
)
PARTICLE_MATERIALS: Tuple[str, ...] = ("spark", "ember", "ice", "energy", "void", "light")
ENERGY_FIELD_TYPES: Tuple[str, ...] = (
    "aurora", "electromagnetic", "gravitational", "temporal", "quantum",
)


class GeneGroup:
    """Behaviour shared by every gene group dataclass."""

    def copy(self):
        """Return a copy that shares no mutable state (colors are copied)."""
        changes = {
            f.name: getattr(self, f.name).copy()
            for f in dataclasses.fields(self)
            if isinstance(getattr(self, f.name), Rgba)
        }
        return dataclasses.replace(self, **changes)


# =============================================================================
# Color
# =============================================================================

COLOR_GENE_SPECS: List[GeneSpec] = [
    ColorGene("primary"),
    ColorGene("secondary"),
    ColorGene("accent"),
    ColorGene("background"),
    BooleanGene("is_shifting"),
    NumericGene("shift_speed", _SPEED),
    EnumGene("blend_mode", BLEND_MODES),
    NumericGene("saturation", _RATIO),
    NumericGene("brightness", _RATIO),
    BooleanGene("has_aura"),
    BooleanGene("is_quantum"),
    BooleanGene("is_pulsing"),
]


@dataclass
class ColorGenes(GeneGroup):
    """Palette and color dynamics."""

    primary: Rgba
    secondary: Rgba
    accent: Rgba
    background: Rgba
    is_shifting: bool
    shift_speed: float
    blend_mode: str
    saturation: float
    brightness: float
    has_aura: bool
    is_quantum: bool
    is_pulsing: bool


# =============================================================================
# Shape
# =============================================================================

SHAPE_GENE_SPECS: List[GeneSpec] = [
    EnumGene("core_shape", SHAPES),
    NumericGene("core_size", _SIZE),
    NumericGene("complexity", _OTHER, integral=True),
    NumericGene("symmetry", _OTHER, integral=True),
    BooleanGene("is_deforming"),
    NumericGene("deform_speed", _SPEED),
    NumericGene("deform_intensity", _RATIO),
    BooleanGene("can_split"),
    NumericGene("split_count", _OTHER, integral=True),
    EnumGene("dimension", DIMENSIONS),
    NumericGene("depth", _RATIO),
]


@dataclass
class ShapeGenes(GeneGroup):
    core_shape: str
    core_size: float
    complexity: int
    symmetry: int
    is_deforming: bool
    deform_speed: float
    deform_intensity: float
    can_split: bool
    split_count: int
    dimension: str
    depth: float


# =============================================================================
# Motion
# =============================================================================

MOTION_GENE_SPECS: List[GeneSpec] = [
    NumericGene("speed", _SPEED),
    NumericGene("acceleration"),
    NumericGene("rotation_speed", _SPEED),
    NumericGene("rotation_axis_x"),
    NumericGene("rotation_axis_y"),
    NumericGene("rotation_axis_z"),
    NumericGene("scaling", _SIZE),
    BooleanGene("pulsing"),
    NumericGene("pulse_speed", _SPEED),
    BooleanGene("has_gravity"),
    BooleanGene("has_bounce"),
    NumericGene("friction"),
    BooleanGene("time_distortion"),
    BooleanGene("space_warping"),
    EnumGene("trajectory", TRAJECTORIES),
]


@dataclass
class MotionGenes(GeneGroup):
    speed: float
    acceleration: float
    rotation_speed: float
    rotation_axis_x: float
    rotation_axis_y: float
    rotation_axis_z: float
    scaling: float
    pulsing: bool
    pulse_speed: float
    has_gravity: bool
    has_bounce: bool
    friction: float
    time_distortion: bool
    space_warping: bool
    trajectory: str


# =============================================================================
# Particles
# =============================================================================

PARTICLE_GENE_SPECS: List[GeneSpec] = [
    NumericGene("count", _OTHER, integral=True),
    NumericGene("size", _SIZE),
    NumericGene("size_variation", _RATIO),
    NumericGene("lifespan"),
    NumericGene("fade_rate", _RATIO),
    EnumGene("behavior", PARTICLE_BEHAVIORS),
    NumericGene("cohesion", _RATIO),
    NumericGene("separation", _RATIO),
    NumericGene("emission_rate"),
    NumericGene("burst_size", _SIZE, integral=True),
    BooleanGene("has_trails"),
    NumericGene("trail_length", _RATIO),
    BooleanGene("is_electric"),
    BooleanGene("is_magnetic"),
]


@dataclass
class ParticleGenes(GeneGroup):
    count: int
    size: float
    size_variation: float
    lifespan: float
    fade_rate: float
    behavior: str
    cohesion: float
    separation: float
    emission_rate: float
    burst_size: int
    has_trails: bool
    trail_length: float
    is_electric: bool
    is_magnetic: bool


# =============================================================================
# Effects
# =============================================================================

FX_GENE_SPECS: List[GeneSpec] = [
    BooleanGene("has_glow"),
    NumericGene("glow_intensity", _RATIO),
    NumericGene("glow_radius", _SIZE),
    BooleanGene("has_blur"),
    NumericGene("blur_amount"),
    BooleanGene("has_distortion"),
    EnumGene("distortion_type", DISTORTION_TYPES),
    NumericGene("distortion_intensity", _RATIO),
    BooleanGene("has_lighting"),
    EnumGene("lighting_type", LIGHTING_TYPES),
    NumericGene("light_intensity", _RATIO),
    BooleanGene("has_time_effect"),
    NumericGene("time_stretch"),
    BooleanGene("has_space_effect"),
    NumericGene("dimension_shift"),
]


@dataclass
class EffectGenes(GeneGroup):
    """Post-processing style effects (glow, blur, distortion, lighting)."""

    has_glow: bool
    glow_intensity: float
    glow_radius: float
    has_blur: bool
    blur_amount: float
    has_distortion: bool
    distortion_type: str
    distortion_intensity: float
    has_lighting: bool
    lighting_type: str
    light_intensity: float
    has_time_effect: bool
    time_stretch: float
    has_space_effect: bool
    dimension_shift: float


# =============================================================================
# Evolution
# =============================================================================

EVOLUTION_GENE_SPECS: List[GeneSpec] = [
    NumericGene("mutation_rate", _RATIO),
    NumericGene("adaptability", _RATIO),
    NumericGene("stability", _RATIO),
    EnumGene("evolution_bias", EVOLUTION_BIASES),
    NumericGene("generation_limit", _OTHER, integral=True),
    BooleanGene("can_self_repair"),
    NumericGene("repair_rate", _RATIO),
    BooleanGene("has_memory"),
    NumericGene("memory_capacity", _OTHER, integral=True),
]


@dataclass
class EvolutionGenes(GeneGroup):
    mutation_rate: float
    adaptability: float
    stability: float
    evolution_bias: str
    generation_limit: int
    can_self_repair: bool
    repair_rate: float
    has_memory: bool
    memory_capacity: int


# =============================================================================
# Chaos
# =============================================================================

CHAOS_GENE_SPECS: List[GeneSpec] = [
    NumericGene("chaos_level", _RATIO),
    NumericGene("unpredictability", _RATIO),
    BooleanGene("can_random_mutate"),
    NumericGene("mutation_intensity", _RATIO),
    BooleanGene("has_quantum_effects"),
    NumericGene("quantum_coherence", _RATIO),
    EnumGene("attractor_type", ATTRACTORS),
    NumericGene("attractor_strength", _RATIO),
    BooleanGene("has_nonlinear_dynamics"),
    NumericGene("bifurcation_point", _RATIO),
]


@dataclass
class ChaosGenes(GeneGroup):
    chaos_level: float
    unpredictability: float
    can_random_mutate: bool
    mutation_intensity: float
    has_quantum_effects: bool
    quantum_coherence: float
    attractor_type: str
    attractor_strength: float
    has_nonlinear_dynamics: bool
    bifurcation_point: float


# =============================================================================
# Elemental
# =============================================================================

ELEMENTAL_GENE_SPECS: List[GeneSpec] = [
    EnumGene("primary_element", ELEMENTS, resample=True),
    EnumGene("secondary_element", ELEMENTS),
    NumericGene("elemental_purity", _RATIO),
    NumericGene("elemental_intensity", _RATIO),
    NumericGene("elemental_stability", _RATIO),
    ColorGene("primary_color", has_alpha=False),
    ColorGene("secondary_color", has_alpha=False),
    ColorGene("accent_color", has_alpha=False),
    BooleanGene("has_elemental_core"),
    BooleanGene("has_elemental_aura"),
    BooleanGene("has_elemental_trail"),
    BooleanGene("has_elemental_reaction"),
    BooleanGene("is_elemental_shifting"),
    BooleanGene("elemental_evolution"),
    NumericGene("elemental_resonance", _RATIO),
    NumericGene("elemental_conflict", _RATIO),
    EnumGene("dominant_element", DOMINANT_ELEMENTS),
]


@dataclass
class ElementalGenes(GeneGroup):
    """Elemental theme; its colors are derived from the primary element."""

    primary_element: str
    secondary_element: str
    elemental_purity: float
    elemental_intensity: float
    elemental_stability: float
    primary_color: Rgba
    secondary_color: Rgba
    accent_color: Rgba
    has_elemental_core: bool
    has_elemental_aura: bool
    has_elemental_trail: bool
    has_elemental_reaction: bool
    is_elemental_shifting: bool
    elemental_evolution: bool
    elemental_resonance: float
    elemental_conflict: float
    dominant_element: str = "none"


# =============================================================================
# Complex (compound spell effects)
# =============================================================================

COMPLEX_GENE_SPECS: List[GeneSpec] = [
    EnumGene("spell_type", SPELL_TYPES, resample=True),
    NumericGene("layer_count", _OTHER, integral=True),
    NumericGene("layer_complexity", _RATIO),
    NumericGene("layer_interaction", _RATIO),
    EnumGene("combination_type", COMBINATION_TYPES),
    BooleanGene("has_spatial_distortion"),
    BooleanGene("has_time_distortion"),
    BooleanGene("has_reality_rift"),
    BooleanGene("has_energy_field"),
    NumericGene("field_radius", _SIZE),
    NumericGene("field_intensity", _RATIO),
    NumericGene("field_pulsation", _RATIO),
    NumericGene("geometric_complexity", _OTHER, integral=True),
    NumericGene("fractional_dimension"),
    NumericGene("morphing_speed", _SPEED),
    NumericGene("morphing_intensity", _RATIO),
    BooleanGene("has_resonance"),
    NumericGene("resonance_frequency", _RATIO),
    NumericGene("resonance_amplitude", _RATIO),
]


@dataclass
class ComplexGenes(GeneGroup):
    spell_type: str
    layer_count: int
    layer_complexity: float
    layer_interaction: float
    combination_type: str
    has_spatial_distortion: bool
    has_time_distortion: bool
    has_reality_rift: bool
    has_energy_field: bool
    field_radius: float
    field_intensity: float
    field_pulsation: float
    geometric_complexity: int
    fractional_dimension: float
    morphing_speed: float
    morphing_intensity: float
    has_resonance: bool
    resonance_frequency: float
    resonance_amplitude: float


# =============================================================================
# Stages (lifecycle phases)
# =============================================================================

STAGE_GENE_SPECS: List[GeneSpec] = [
    NumericGene("stage_count", _OTHER, integral=True),
    NumericGene("generation_duration", _OTHER, integral=True),
    EnumGene("generation_style", GENERATION_STYLES),
    NumericGene("generation_intensity", _RATIO),
    NumericGene("launch_duration", _OTHER, integral=True),
    EnumGene("launch_style", LAUNCH_STYLES),
    NumericGene("launch_force", _RATIO),
    NumericGene("flight_duration", _OTHER, integral=True),
    EnumGene("flight_style", FLIGHT_STYLES),
    NumericGene("flight_evolution", _RATIO),
    NumericGene("flight_trail_complexity", _OTHER, integral=True),
    NumericGene("flight_environment_interaction", _RATIO),
    NumericGene("impact_duration", _OTHER, integral=True),
    EnumGene("impact_style", IMPACT_STYLES),
    NumericGene("impact_expansion", _RATIO),
    NumericGene("dissipation_duration", _OTHER, integral=True),
    EnumGene("dissipation_style", DISSIPATION_STYLES),
    NumericGene("dissipation_complexity", _RATIO),
    BooleanGene("stage_transition_smooth"),
    NumericGene("stage_overlap", _RATIO),
    BooleanGene("adaptive_staging"),
    NumericGene("stage_amplification", _RATIO),
]


@dataclass
class StageGenes(GeneGroup):
    """Durations (ms) and styles for each lifecycle phase."""

    stage_count: int
    generation_duration: int
    generation_style: str
    generation_intensity: float
    launch_duration: int
    launch_style: str
    launch_force: float
    flight_duration: int
    flight_style: str
    flight_evolution: float
    flight_trail_complexity: int
    flight_environment_interaction: float
    impact_duration: int
    impact_style: str
    impact_expansion: float
    dissipation_duration: int
    dissipation_style: str
    dissipation_complexity: float
    stage_transition_smooth: bool
    stage_overlap: float
    adaptive_staging: bool
    stage_amplification: float


# =============================================================================
# Material
# =============================================================================

MATERIAL_GENE_SPECS: List[GeneSpec] = [
    EnumGene("material_type", MATERIAL_TYPES),
    NumericGene("opacity", _RATIO),
    NumericGene("transparency", _RATIO),
    NumericGene("refractive_index"),
    BooleanGene("has_emission"),
    NumericGene("emission_intensity", _RATIO),
    NumericGene("emission_hue"),
    NumericGene("emission_saturation", _RATIO),
    NumericGene("emission_lightness", _RATIO),
    NumericGene("emission_pulsation", _RATIO),
    BooleanGene("has_reflection"),
    NumericGene("reflection_intensity", _RATIO),
    BooleanGene("has_iridescence"),
    NumericGene("iridescence_shift", _RATIO),
    BooleanGene("is_dynamic"),
    NumericGene("dynamic_speed", _SPEED),
    NumericGene("material_flow", _RATIO),
    BooleanGene("has_particle_emission"),
    NumericGene("particle_emission_rate"),
    EnumGene("particle_material_type", PARTICLE_MATERIALS),
    BooleanGene("has_energy_field"),
    EnumGene("energy_field_type", ENERGY_FIELD_TYPES),
    NumericGene("energy_field_intensity", _RATIO),
    BooleanGene("has_distortion"),
    EnumGene("distortion_type", DISTORTION_TYPES),
    NumericGene("distortion_intensity", _RATIO),
]


@dataclass
class MaterialGenes(GeneGroup):
    material_type: str
    opacity: float
    transparency: float
    refractive_index: float
    has_emission: bool
    emission_intensity: float
    emission_hue: float
    emission_saturation: float
    emission_lightness: float
    emission_pulsation: float
    has_reflection: bool
    reflection_intensity: float
    has_iridescence: bool
    iridescence_shift: float
    is_dynamic: bool
    dynamic_speed: float
    material_flow: float
    has_particle_emission: bool
    particle_emission_rate: float
    particle_material_type: str
    has_energy_field: bool
    energy_field_type: str
    energy_field_intensity: float
    has_distortion: bool
    distortion_type: str
    distortion_intensity: float


# Registry: genome attribute name -> (container class, field specs).
# Order is the canonical iteration order for mutation, crossover and codecs.
GENE_GROUPS: Dict[str, Tuple[Type[GeneGroup], List[GeneSpec]]] = {
    "elemental": (ElementalGenes, ELEMENTAL_GENE_SPECS),
    "complex": (ComplexGenes, COMPLEX_GENE_SPECS),
    "stage": (StageGenes, STAGE_GENE_SPECS),
    "material": (MaterialGenes, MATERIAL_GENE_SPECS),
    "color": (ColorGenes, COLOR_GENE_SPECS),
    "shape": (ShapeGenes, SHAPE_GENE_SPECS),
    "motion": (MotionGenes, MOTION_GENE_SPECS),
    "particle": (ParticleGenes, PARTICLE_GENE_SPECS),
    "fx": (EffectGenes, FX_GENE_SPECS),
    "evolution": (EvolutionGenes, EVOLUTION_GENE_SPECS),
    "chaos": (ChaosGenes, CHAOS_GENE_SPECS),
}

"""Spell export: a readable profile plus the full genome record.

An export bundles:

- ``spell_profile``: generated name, description and visual description
- ``components``: the element, motion, particle, effect and shape genes a
  game designer cares about
- ``gameplay``: rough damage/range/mana estimates derived from complexity
- ``genome``: the complete codec record, so the export can be re-imported

``dumps_export`` serializes with orjson. ``genome_from_export`` accepts the
parsed document (or its JSON text) and decodes the embedded record.
"""

import logging
from typing import Any, Dict, Optional, Union

import orjson

from visual_dna.genetics.factory import neutral_genome
from visual_dna.genetics.genome_codec import DecodeResult, genome_from_dict, genome_to_dict
from visual_dna.genetics.lineage import now_ms
from visual_dna.scoring.quality import calculate_complexity
from visual_dna.util.rng import RandomSource, require_rng_param

logger = logging.getLogger(__name__)

EXPORT_FORMAT_VERSION = 1

_SPELL_ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"

# Naming thresholds
PARTICLE_BURST_COUNT = 5
CHAOS_NAME_THRESHOLD = 0.7
CHAOS_DESCRIPTION_THRESHOLD = 0.5

MOTION_NAMES = {
    "straight": "Lance",
    "wave": "Wave",
    "spiral": "Spiral",
    "orbit": "Orbit",
    "chaotic": "Storm",
}

MOTION_PHRASES = {
    "straight": "fired along a straight line",
    "wave": "advancing in waves",
    "spiral": "moving along a spiral",
    "orbit": "circling in orbit",
    "chaotic": "moving erratically",
}


def _color_word(r: int, g: int, b: int) -> str:
    if r > 200 and g < 100:
        return "red-orange"
    if g > 200 and r < 100:
        return "green"
    if b > 200 and r < 150:
        return "blue"
    if r > 200 and g > 200:
        return "yellow"
    if r > 150 and b > 150:
        return "violet"
    return "many-colored"


def describe_spell(genome: Any) -> Dict[str, str]:
    """Generate ``name``, ``description`` and ``visual`` text for a genome."""
    element = genome.elemental.primary_element
    trajectory = genome.motion.trajectory
    has_particles = genome.particle.count > PARTICLE_BURST_COUNT
    chaos_level = genome.chaos.chaos_level
    element_name = element.capitalize()

    name_parts = [element_name, MOTION_NAMES.get(trajectory, "Arcane")]
    if has_particles:
        name_parts.append("Burst")
    if chaos_level > CHAOS_NAME_THRESHOLD:
        name_parts.append("of Chaos")

    description = f"A {element} spell {MOTION_PHRASES.get(trajectory, 'moving strangely')}"
    if has_particles:
        description += ", shedding particles"
    if genome.fx.has_glow:
        description += ", glowing as it goes"
    if chaos_level > CHAOS_DESCRIPTION_THRESHOLD:
        description += ", with unpredictable chaotic energy"
    description += "."

    primary = genome.elemental.primary_color
    visual = f"{_color_word(primary.r, primary.g, primary.b)} {element} energy"
    if trajectory == "spiral":
        visual += " rotating in a spiral"
    elif trajectory == "wave":
        visual += " rising and falling like a wave"
    else:
        visual += " moving quickly"
    if has_particles:
        visual += ", scattering energy particles"

    return {"name": " ".join(name_parts), "description": description, "visual": visual}


def gameplay_estimates(genome: Any, complexity: Optional[int] = None) -> Dict[str, Any]:
    """Damage ``50 + 2c``, range ``100 + speed`` and mana ``20 + 0.8c`` (rounded)."""
    if complexity is None:
        complexity = calculate_complexity(genome)
    return {
        "complexity": complexity,
        "quality_score": genome.quality_score,
        "generation": genome.generation,
        "estimated_damage": round(50 + complexity * 2),
        "estimated_range": round(100 + genome.motion.speed),
        "estimated_mana_cost": round(20 + complexity * 0.8),
    }


def spell_components(genome: Any) -> Dict[str, Any]:
    elemental = genome.elemental
    return {
        "element": {
            "primary": elemental.primary_element,
            "secondary": elemental.secondary_element,
            "dominant": elemental.dominant_element,
            "intensity": elemental.elemental_intensity,
            "purity": elemental.elemental_purity,
        },
        "motion": {
            "trajectory": genome.motion.trajectory,
            "speed": genome.motion.speed,
            "acceleration": genome.motion.acceleration,
            "has_gravity": genome.motion.has_gravity,
            "has_bounce": genome.motion.has_bounce,
        },
        "particles": {
            "count": genome.particle.count,
            "size": genome.particle.size,
            "lifespan": genome.particle.lifespan,
            "has_trails": genome.particle.has_trails,
            "is_electric": genome.particle.is_electric,
        },
        "effects": {
            "glow": {"enabled": genome.fx.has_glow, "intensity": genome.fx.glow_intensity},
            "blur": {"enabled": genome.fx.has_blur, "amount": genome.fx.blur_amount},
            "distortion": {
                "enabled": genome.fx.has_distortion,
                "intensity": genome.fx.distortion_intensity,
            },
            "chaos": {
                "level": genome.chaos.chaos_level,
                "has_quantum_effects": genome.chaos.has_quantum_effects,
                "unpredictability": genome.chaos.unpredictability,
            },
        },
        "shape": {
            "core_shape": genome.shape.core_shape,
            "complexity": genome.shape.complexity,
            "symmetry": genome.shape.symmetry,
            "is_deforming": genome.shape.is_deforming,
        },
    }


def build_export(
    genome: Any,
    rng: Optional[RandomSource] = None,
    *,
    lab_settings: Optional[Dict[str, Any]] = None,
    timestamp: Optional[int] = None,
) -> Dict[str, Any]:
    """Assemble the export document for ``genome``.

    Args:
        genome: Genome to export
        rng: Random source for the spell id suffix (required)
        lab_settings: Optional lab settings snapshot to embed
        timestamp: Export time in ms (defaults to now)
    """
    rng = require_rng_param(rng, "build_export")
    timestamp = now_ms() if timestamp is None else timestamp
    suffix = "".join(rng.choice(_SPELL_ID_ALPHABET) for _ in range(6))
    text = describe_spell(genome)

    document: Dict[str, Any] = {
        "format_version": EXPORT_FORMAT_VERSION,
        "spell_profile": {
            "id": f"spell_{timestamp}_{suffix}",
            "name": text["name"],
            "description": text["description"],
            "visual_description": text["visual"],
            "exported_at": timestamp,
        },
        "components": spell_components(genome),
        "gameplay": gameplay_estimates(genome),
        "signature": genome.signature,
        "genome": genome_to_dict(genome),
    }
    if lab_settings is not None:
        document["lab_settings"] = lab_settings
    logger.debug("Built spell export %s", document["spell_profile"]["id"])
    return document


def dumps_export(document: Dict[str, Any], *, indent: bool = True) -> bytes:
    option = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(document, option=option)


def genome_from_export(document: Union[Dict[str, Any], bytes, str]) -> DecodeResult:
    """Decode the genome embedded in an export document.

    Missing or damaged genome fields take neutral defaults (see
    ``genome_from_dict``).

    Raises:
        orjson.JSONDecodeError: ``document`` is text that is not valid JSON
    """
    if isinstance(document, (bytes, str)):
        document = orjson.loads(document)
    record = document.get("genome") if isinstance(document, dict) else None
    return genome_from_dict(record, genome_factory=neutral_genome)

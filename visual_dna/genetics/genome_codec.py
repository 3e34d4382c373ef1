"""Genome serialization/deserialization helpers.

This module is the persistence/transfer boundary for
``visual_dna.genetics.genome.Genome``. Records are plain dicts of JSON
primitives: one sub-dict per gene group plus lineage and scoring metadata.

Decoding never raises for bad input. Every missing, mistyped, non-finite or
out-of-enum value falls back to the neutral genome's value and its path is
reported in ``DecodeResult.defaulted``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from visual_dna.entropy import EntropyRecord
from visual_dna.genetics.gene import COLOR_CHANNELS, ColorGene, GeneSpec, NumericGene, Rgba
from visual_dna.genetics.groups import GENE_GROUPS
from visual_dna.genetics.invariants import enforce_invariants
from visual_dna.genetics.lineage import MAX_LINEAGE_ENTRIES, LineageRecord
from visual_dna.genetics.validation import alpha_issue, channel_issue, gene_value_issue
from visual_dna.math_utils import clamp01
from visual_dna.util.rng import RandomSource, derived_rng

logger = logging.getLogger(__name__)

NEUTRAL_SEED = 0
METADATA_KEYS = ("generation", "lineage", "entropy", "quality_score", "is_usable", "timestamp")


@dataclass
class DecodeResult:
    """Decoded genome plus the dotted paths that fell back to defaults."""

    genome: Any
    defaulted: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.defaulted


def color_to_dict(spec: ColorGene, color: Rgba) -> dict[str, Any]:
    data: dict[str, Any] = {"r": color.r, "g": color.g, "b": color.b}
    if spec.has_alpha:
        data["a"] = color.a
    return data


def group_to_dict(specs: list[GeneSpec], group: object) -> dict[str, Any]:
    """Serialize one gene group using its specs."""
    values: dict[str, Any] = {}
    for spec in specs:
        value = getattr(group, spec.name)
        if isinstance(spec, ColorGene):
            values[spec.name] = color_to_dict(spec, value)
        else:
            values[spec.name] = value
    return values


def genome_to_dict(genome: Any) -> dict[str, Any]:
    """Serialize a genome into JSON-compatible primitives."""
    record: dict[str, Any] = {
        name: group_to_dict(specs, getattr(genome, name))
        for name, (_cls, specs) in GENE_GROUPS.items()
    }
    record.update(
        {
            "generation": genome.generation,
            "lineage": [entry.to_dict() for entry in genome.lineage],
            "entropy": genome.entropy.to_dict() if genome.entropy is not None else None,
            "quality_score": genome.quality_score,
            "is_usable": genome.is_usable,
            "timestamp": genome.timestamp,
        }
    )
    return record


def _decode_color(
    spec: ColorGene, raw: Any, default: Rgba, path: str, defaulted: list[str]
) -> Rgba:
    if not isinstance(raw, dict):
        defaulted.append(path)
        return default.copy()

    channels = {}
    for channel in COLOR_CHANNELS:
        value = raw.get(channel)
        if channel_issue(value) is None:
            channels[channel] = int(value)
        else:
            defaulted.append(f"{path}.{channel}")
            channels[channel] = getattr(default, channel)

    alpha = default.a
    if spec.has_alpha:
        value = raw.get("a")
        if alpha_issue(value) is None:
            alpha = float(value)
        else:
            defaulted.append(f"{path}.a")
    return Rgba(channels["r"], channels["g"], channels["b"], alpha)


def _decode_value(spec: GeneSpec, value: Any) -> Any:
    if isinstance(spec, NumericGene):
        return int(value) if spec.integral else float(value)
    return value


def apply_group_from_dict(
    specs: list[GeneSpec], group: object, raw: dict[str, Any], *, path: str, defaulted: list[str]
) -> None:
    """Copy legal values from ``raw`` onto ``group``; record every fallback."""
    for spec in specs:
        field_path = f"{path}.{spec.name}"
        if spec.name not in raw:
            defaulted.append(field_path)
            continue
        value = raw[spec.name]
        if isinstance(spec, ColorGene):
            setattr(
                group,
                spec.name,
                _decode_color(spec, value, getattr(group, spec.name), field_path, defaulted),
            )
            continue
        issue = gene_value_issue(spec, value)
        if issue:
            logger.debug("Rejected %s: %s", field_path, issue)
            defaulted.append(field_path)
            continue
        setattr(group, spec.name, _decode_value(spec, value))


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _apply_metadata(genome: Any, data: dict[str, Any], defaulted: list[str]) -> None:
    generation = data.get("generation")
    if _is_int(generation) and generation >= 0:
        genome.generation = generation
    else:
        defaulted.append("generation")

    lineage = data.get("lineage")
    try:
        if not isinstance(lineage, list):
            raise TypeError("lineage must be a list")
        genome.lineage = [LineageRecord.from_dict(entry) for entry in lineage][-MAX_LINEAGE_ENTRIES:]
    except (KeyError, TypeError, ValueError):
        defaulted.append("lineage")

    entropy = data.get("entropy")
    if entropy is not None:
        try:
            genome.entropy = EntropyRecord.from_dict(entropy)
        except (KeyError, TypeError, ValueError):
            defaulted.append("entropy")

    quality = data.get("quality_score")
    if isinstance(quality, (int, float)) and not isinstance(quality, bool) and math.isfinite(quality):
        genome.quality_score = clamp01(float(quality))
    else:
        defaulted.append("quality_score")

    is_usable = data.get("is_usable")
    if isinstance(is_usable, bool):
        genome.is_usable = is_usable
    else:
        defaulted.append("is_usable")

    timestamp = data.get("timestamp")
    if _is_int(timestamp):
        genome.timestamp = timestamp
    else:
        defaulted.append("timestamp")


def genome_from_dict(
    data: Any,
    *,
    genome_factory: Callable[[], Any],
    rng: Optional[RandomSource] = None,
) -> DecodeResult:
    """Deserialize a genome from JSON-compatible primitives.

    Args:
        data: Record produced by ``genome_to_dict`` (possibly partial or damaged)
        genome_factory: Returns a fresh neutral genome supplying the defaults
        rng: Resolves an effect conflict present in the record; a fixed
            neutral-seed RNG is used when omitted so decoding stays deterministic

    Returns:
        DecodeResult with the genome and the list of defaulted paths.
        Unknown keys are ignored.
    """
    genome = genome_factory()
    defaulted: list[str] = []

    if not isinstance(data, dict):
        logger.warning(
            "Genome record is %s, not a dict; using neutral defaults", type(data).__name__
        )
        return DecodeResult(genome=genome, defaulted=["<record>"])

    for name, (_cls, specs) in GENE_GROUPS.items():
        raw = data.get(name)
        if not isinstance(raw, dict):
            defaulted.append(name)
            continue
        apply_group_from_dict(specs, getattr(genome, name), raw, path=name, defaulted=defaulted)

    _apply_metadata(genome, data, defaulted)

    if genome.fx.has_distortion and genome.chaos.has_quantum_effects:
        enforce_invariants(genome, rng or derived_rng(NEUTRAL_SEED))

    if defaulted:
        logger.warning(
            "Genome record incomplete; %d field(s) defaulted: %s",
            len(defaulted),
            ", ".join(defaulted),
        )
    return DecodeResult(genome=genome, defaulted=defaulted)


def genome_debug_snapshot(genome: Any) -> dict[str, Any]:
    """Return a compact, stable dict for logging/debugging."""
    return {
        "signature": genome.signature,
        "generation": genome.generation,
        "element": genome.elemental.primary_element,
        "spell_type": genome.complex.spell_type,
        "palette_primary": genome.color.primary.rgb(),
        "chaos_level": round(genome.chaos.chaos_level, 3),
        "quality_score": round(genome.quality_score, 3),
    }

"""Validation helpers for genomes.

These functions are intended for debugging and safety checks, not hot-path
logic. The per-value check is shared with the codec, which uses it to decide
whether a decoded value is usable or must fall back to a default.
"""

from __future__ import annotations

import math
from typing import Any, List, Optional

from visual_dna.genetics.gene import (
    COLOR_CHANNELS,
    BooleanGene,
    ColorGene,
    EnumGene,
    GeneSpec,
    NumericGene,
    NumericSemantic,
    Rgba,
)
from visual_dna.genetics.groups import GENE_GROUPS


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def numeric_issue(spec: NumericGene, value: Any) -> Optional[str]:
    """Describe why ``value`` is not a legal value for ``spec`` (None if legal)."""
    if not _is_number(value):
        return f"expected number, got {type(value).__name__}"
    if not math.isfinite(float(value)):
        return f"not finite ({value})"
    if spec.integral and not float(value).is_integer():
        return f"expected whole number, got {value}"
    if spec.semantic in (NumericSemantic.RATIO, NumericSemantic.ALPHA):
        if not (0.0 <= value <= 1.0):
            return f"{value} not in [0, 1]"
    elif spec.semantic is NumericSemantic.COLOR_CHANNEL:
        if not (0 <= value <= 255):
            return f"{value} not in [0, 255]"
    elif spec.semantic is NumericSemantic.SIZE:
        if value <= 0:
            return f"{value} <= 0"
    return None


def channel_issue(value: Any) -> Optional[str]:
    return numeric_issue(NumericGene("channel", NumericSemantic.COLOR_CHANNEL, integral=True), value)


def alpha_issue(value: Any) -> Optional[str]:
    return numeric_issue(NumericGene("a", NumericSemantic.ALPHA), value)


def gene_value_issue(spec: GeneSpec, value: Any) -> Optional[str]:
    """Return a human-readable problem with a gene value, or None if it is legal."""
    if isinstance(spec, NumericGene):
        return numeric_issue(spec, value)
    if isinstance(spec, BooleanGene):
        if not isinstance(value, bool):
            return f"expected bool, got {type(value).__name__}"
        return None
    if isinstance(spec, EnumGene):
        if value not in spec.choices:
            return f"{value!r} not one of {', '.join(spec.choices)}"
        return None
    if isinstance(spec, ColorGene):
        if not isinstance(value, Rgba):
            return f"expected Rgba, got {type(value).__name__}"
        for channel in COLOR_CHANNELS:
            issue = channel_issue(getattr(value, channel))
            if issue:
                return f"{channel}: {issue}"
        issue = alpha_issue(value.a)
        if issue:
            return f"a: {issue}"
        return None
    raise TypeError(f"Unknown gene spec: {spec!r}")


def validate_group(specs: List[GeneSpec], group: object, *, path: str) -> List[str]:
    """Validate a gene group against its specs.

    Returns a list of human-readable issues; empty means valid.
    """
    issues: List[str] = []
    for spec in specs:
        if not hasattr(group, spec.name):
            issues.append(f"{path}.{spec.name}: missing attribute")
            continue
        issue = gene_value_issue(spec, getattr(group, spec.name))
        if issue:
            issues.append(f"{path}.{spec.name}: {issue}")
    return issues


def validate_genome(genome: Any) -> List[str]:
    """Validate every gene group plus the effect-combination invariant."""
    issues: List[str] = []
    for name, (group_cls, specs) in GENE_GROUPS.items():
        group = getattr(genome, name, None)
        if not isinstance(group, group_cls):
            issues.append(f"genome.{name}: expected {group_cls.__name__}, got {type(group).__name__}")
            continue
        issues.extend(validate_group(specs, group, path=f"genome.{name}"))

    if not issues and genome.fx.has_distortion and genome.chaos.has_quantum_effects:
        issues.append("genome: fx.has_distortion and chaos.has_quantum_effects are both enabled")
    if len(genome.lineage) > 3:
        issues.append(f"genome.lineage: {len(genome.lineage)} entries (max 3)")
    return issues

"""Genome class for procedural visual descriptors.

This module provides the Genome dataclass: eleven fixed-shape gene groups
plus lineage and scoring metadata. Generation lives in
``visual_dna.genetics.factory``; mutation and crossover in
``visual_dna.evolution``.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from visual_dna.entropy import EntropyRecord
from visual_dna.exceptions import InvalidGenomeError
from visual_dna.genetics.genome_codec import genome_from_dict, genome_to_dict
from visual_dna.genetics.groups import (
    GENE_GROUPS,
    ChaosGenes,
    ColorGenes,
    ComplexGenes,
    EffectGenes,
    ElementalGenes,
    EvolutionGenes,
    GeneGroup,
    MaterialGenes,
    MotionGenes,
    ParticleGenes,
    ShapeGenes,
    StageGenes,
)
from visual_dna.genetics.lineage import LineageRecord, now_ms
from visual_dna.genetics.validation import validate_genome

logger = logging.getLogger(__name__)


@dataclass
class Genome:
    """Complete visual descriptor.

    Attributes:
        elemental .. chaos: Gene groups (see ``GENE_GROUPS`` for the order)
        generation: 0 for factory genomes, incremented by mutation/crossover
        lineage: At most three recent lineage records
        entropy: Entropy the genome was seeded from, if any
        quality_score: Last quality score assigned by the lab
        is_usable: Whether the genome is fit for export
        timestamp: Creation time in milliseconds since epoch
    """

    elemental: ElementalGenes
    complex: ComplexGenes
    stage: StageGenes
    material: MaterialGenes
    color: ColorGenes
    shape: ShapeGenes
    motion: MotionGenes
    particle: ParticleGenes
    fx: EffectGenes
    evolution: EvolutionGenes
    chaos: ChaosGenes

    generation: int = 0
    lineage: List[LineageRecord] = field(default_factory=list)
    entropy: Optional[EntropyRecord] = None
    quality_score: float = 0.0
    is_usable: bool = True
    timestamp: int = field(default_factory=now_ms)

    def groups(self) -> Iterator[Tuple[str, GeneGroup]]:
        """Yield ``(name, group)`` pairs in canonical order."""
        for name in GENE_GROUPS:
            yield name, getattr(self, name)

    def copy(self) -> "Genome":
        """Deep copy of gene state and metadata (the entropy record is immutable)."""
        return Genome(
            **{name: group.copy() for name, group in self.groups()},
            generation=self.generation,
            lineage=list(self.lineage),
            entropy=self.entropy,
            quality_score=self.quality_score,
            is_usable=self.is_usable,
            timestamp=self.timestamp,
        )

    @property
    def has_effect_conflict(self) -> bool:
        """True when distortion and quantum effects are both enabled."""
        return self.fx.has_distortion and self.chaos.has_quantum_effects

    @property
    def signature(self) -> str:
        from visual_dna.scoring.uniqueness import genome_signature

        return genome_signature(self)

    @property
    def complexity(self) -> int:
        from visual_dna.scoring.quality import calculate_complexity

        return calculate_complexity(self)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize this genome into JSON-compatible primitives."""
        return genome_to_dict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Genome":
        """Deserialize a genome; missing or malformed fields take neutral defaults."""
        from visual_dna.genetics.factory import neutral_genome

        return genome_from_dict(data, genome_factory=neutral_genome).genome

    def validate(self) -> Dict[str, Any]:
        """Validate field types, ranges and invariants; returns a dict with any issues."""
        issues = validate_genome(self)
        return {"ok": not issues, "issues": issues}

    def assert_valid(self) -> None:
        """Raise InvalidGenomeError if validation finds problems (debug aid)."""
        result = self.validate()
        if result["ok"]:
            return
        issues = "\n".join(result["issues"])
        raise InvalidGenomeError(f"Invalid genome:\n{issues}")

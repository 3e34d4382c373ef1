"""Genome schema, generation and persistence.

This package provides:

- Declarative gene specs (NumericGene, BooleanGene, EnumGene, ColorGene)
- Eleven fixed-shape gene groups and their spec lists
- Deterministic seed -> Genome generation (from_seed / from_entropy)
- The distortion/quantum invariant enforcer
- The dict codec and validation helpers
"""

from visual_dna.genetics.factory import from_entropy, from_seed, neutral_genome
from visual_dna.genetics.gene import (
    BooleanGene,
    ColorGene,
    EnumGene,
    GeneSpec,
    NumericGene,
    NumericSemantic,
    Rgba,
)
from visual_dna.genetics.genome import Genome
from visual_dna.genetics.genome_codec import DecodeResult, genome_from_dict, genome_to_dict
from visual_dna.genetics.groups import GENE_GROUPS
from visual_dna.genetics.invariants import enforce_invariants
from visual_dna.genetics.lineage import LineageRecord
from visual_dna.genetics.validation import validate_genome

__all__ = [
    # Core classes
    "Genome",
    "LineageRecord",
    "Rgba",
    # Gene specifications
    "GeneSpec",
    "NumericGene",
    "NumericSemantic",
    "BooleanGene",
    "EnumGene",
    "ColorGene",
    "GENE_GROUPS",
    # Generation
    "from_seed",
    "from_entropy",
    "neutral_genome",
    "enforce_invariants",
    # Serialization helpers
    "DecodeResult",
    "genome_to_dict",
    "genome_from_dict",
    "validate_genome",
]

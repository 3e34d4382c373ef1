"""Procedural visual genome generation and evolutionary scoring.

This package contains the pure generation and scoring logic for the visual DNA
lab, with no rendering dependencies. Key modules include:

- entropy: Multi-source entropy collection and chaos seed derivation
- genetics: Gene schema, gene factory, invariants, codec and validation
- evolution: Mutation and crossover operators
- scoring: Quality, uniqueness and surprise evaluation
- lab: Evolution context, bounded histories and experiment orchestration
- events: Synchronous event bus and lab domain events

Design note: this module exposes a small, explicit public API via ``__all__``.
Use direct imports from subpackages for internal helpers.
"""

from visual_dna.entropy import EntropyRecord, EntropySource
from visual_dna.genetics import Genome, from_seed
from visual_dna.lab import DnaLab, EvolutionContext

__all__ = [
    "DnaLab",
    "EntropyRecord",
    "EntropySource",
    "EvolutionContext",
    "Genome",
    "from_seed",
]

"""Stateless genome API endpoints.

These endpoints operate on genome records passed in the request body and
never touch the lab's history:

- Generate a genome from a seed
- Decode and validate a (possibly damaged) record
- Mutate or cross records
- Score a record in isolation
- Build a spell export for a record
"""

import logging
import random as pyrandom
from typing import Any, Dict, Optional

from fastapi import APIRouter

from backend.models import (
    CrossoverRequest,
    GenomeRequest,
    GenomeResponse,
    MutateRequest,
    SeedRequest,
    ValidationResponse,
)
from visual_dna.evolution import crossover_genomes, mutate_genome
from visual_dna.export import build_export
from visual_dna.genetics import Genome, from_seed, genome_from_dict, neutral_genome
from visual_dna.genetics.genome_codec import DecodeResult
from visual_dna.scoring import QualityScorer

logger = logging.getLogger(__name__)


def _decode(record: Dict[str, Any]) -> DecodeResult:
    return genome_from_dict(record, genome_factory=neutral_genome)


def _response(genome: Genome, defaulted: Optional[list] = None) -> GenomeResponse:
    return GenomeResponse(
        genome=genome.to_dict(),
        signature=genome.signature,
        complexity=genome.complexity,
        defaulted=defaulted or [],
    )


def setup_router() -> APIRouter:
    """Create the genome router.

    Returns:
        Configured APIRouter
    """
    router = APIRouter(prefix="/api/genomes", tags=["genomes"])
    scorer = QualityScorer()

    @router.post("/seed", response_model=GenomeResponse)
    async def genome_from_seed(request: SeedRequest):
        return _response(from_seed(request.seed, coherence=request.coherence))

    @router.post("/decode", response_model=GenomeResponse)
    async def decode_genome(request: GenomeRequest):
        result = _decode(request.genome)
        return _response(result.genome, result.defaulted)

    @router.post("/validate", response_model=ValidationResponse)
    async def validate_genome(request: GenomeRequest):
        """Report which fields were defaulted and whether the decoded genome is valid."""
        result = _decode(request.genome)
        validation = result.genome.validate()
        return ValidationResponse(
            ok=validation["ok"] and result.ok,
            issues=validation["issues"],
            defaulted=result.defaulted,
        )

    @router.post("/mutate", response_model=GenomeResponse)
    async def mutate(request: MutateRequest):
        parent = _decode(request.genome).genome
        child = mutate_genome(parent, request.rate, rng=pyrandom.Random(request.rng_seed))
        return _response(child)

    @router.post("/crossover", response_model=GenomeResponse)
    async def crossover(request: CrossoverRequest):
        parent_a = _decode(request.parent_a).genome
        parent_b = _decode(request.parent_b).genome
        child = crossover_genomes(parent_a, parent_b, rng=pyrandom.Random(request.rng_seed))
        return _response(child)

    @router.post("/score")
    async def score(request: GenomeRequest):
        """Quality sub-scores against an empty history."""
        genome = _decode(request.genome).genome
        report = scorer.evaluate(genome)
        return {**report.to_dict(), "tier": report.tier.value, "signature": genome.signature}

    @router.post("/export")
    async def export(request: GenomeRequest):
        genome = _decode(request.genome).genome
        return build_export(genome, pyrandom.Random())

    return router

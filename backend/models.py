"""Request and response models for the lab API."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ServerInfo(BaseModel):
    """Information about the running API server."""

    version: str
    hostname: str
    port: int
    uptime_seconds: float
    total_experiments: int
    surprise_count: int


class SeedRequest(BaseModel):
    """Generate a genome from a chaos seed."""

    seed: float
    coherence: Optional[float] = Field(default=None, ge=0.0, le=1.0)


class GenomeRequest(BaseModel):
    """A genome record (possibly partial) as produced by ``genome_to_dict``."""

    genome: Dict[str, Any]


class MutateRequest(BaseModel):
    genome: Dict[str, Any]
    rate: float = Field(default=0.3, ge=0.0, le=1.0)
    rng_seed: Optional[int] = None


class CrossoverRequest(BaseModel):
    parent_a: Dict[str, Any]
    parent_b: Dict[str, Any]
    rng_seed: Optional[int] = None


class GenomeResponse(BaseModel):
    """Genome record plus its derived metrics."""

    genome: Dict[str, Any]
    signature: str
    complexity: int
    defaulted: List[str] = Field(default_factory=list)


class ValidationResponse(BaseModel):
    ok: bool
    issues: List[str]
    defaulted: List[str]


class SettingsUpdate(BaseModel):
    """Partial lab settings update; omitted fields keep their value."""

    complexity: Optional[int] = Field(default=None, ge=1, le=10)
    chaos_level: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    mutation_rate: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    max_history_size: Optional[int] = Field(default=None, ge=1)
    max_surprise_size: Optional[int] = Field(default=None, ge=1)
    apply_to_new_genomes: Optional[bool] = None


class EnhancerUpdate(BaseModel):
    level: Optional[int] = Field(default=None, ge=1, le=5)
    active: Optional[bool] = None


class CrossoverExperimentRequest(BaseModel):
    """Optional explicit partner for a crossover experiment."""

    partner: Optional[Dict[str, Any]] = None


class TickRequest(BaseModel):
    time_ms: float


class ImportRequest(BaseModel):
    """A spell export document (see ``visual_dna.export``)."""

    document: Dict[str, Any]

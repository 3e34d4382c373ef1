"""Lab API endpoints.

This router exposes the stateful lab:
- Running random, evolution, crossover and surprise experiments
- Browsing the experiment and surprise histories
- Reading and updating settings and element enhancers
- Advancing chaos dynamics
- Exporting the current genome and importing an export
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, status

from backend.models import (
    CrossoverExperimentRequest,
    EnhancerUpdate,
    ImportRequest,
    SettingsUpdate,
    TickRequest,
)
from visual_dna.export import build_export, genome_from_export
from visual_dna.genetics import genome_from_dict, neutral_genome
from visual_dna.lab import DnaLab

logger = logging.getLogger(__name__)


def setup_router(lab: DnaLab) -> APIRouter:
    """Create the lab router bound to ``lab``.

    Args:
        lab: The lab instance serving every request

    Returns:
        Configured APIRouter
    """
    router = APIRouter(prefix="/api/lab", tags=["lab"])

    # =========================================================================
    # Experiments
    # =========================================================================

    @router.post("/experiments/random")
    async def random_experiment():
        return lab.random_experiment().to_dict()

    @router.post("/experiments/evolution")
    async def evolution_experiment():
        return lab.evolution_experiment().to_dict()

    @router.post("/experiments/crossover")
    async def crossover_experiment(request: Optional[CrossoverExperimentRequest] = None):
        partner = None
        if request is not None and request.partner is not None:
            partner = genome_from_dict(request.partner, genome_factory=neutral_genome).genome
        return lab.crossover_experiment(partner).to_dict()

    @router.post("/experiments/surprise")
    async def surprise_experiment():
        return lab.surprise_experiment().to_dict()

    # =========================================================================
    # History
    # =========================================================================

    @router.get("/history")
    async def history(include_genome: bool = False):
        """Recorded experiments, newest first."""
        return [entry.to_dict(include_genome=include_genome) for entry in lab.context.history()]

    @router.get("/surprises")
    async def surprises(include_genome: bool = False):
        return [entry.to_dict(include_genome=include_genome) for entry in lab.context.surprises()]

    @router.get("/experiments/{experiment_id}")
    async def get_experiment(experiment_id: str):
        entry = lab.context.find(experiment_id)
        if entry is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Experiment {experiment_id} not found",
            )
        return entry.to_dict()

    # =========================================================================
    # Status and settings
    # =========================================================================

    @router.get("/status")
    async def lab_status():
        return lab.status()

    @router.patch("/settings")
    async def update_settings(update: SettingsUpdate):
        changes = update.model_dump(exclude_none=True)
        settings = lab.update_settings(**changes)
        return dict(settings.__dict__)

    @router.post("/enhancers/{element}")
    async def update_enhancer(element: str, update: EnhancerUpdate):
        enhancer = lab.set_enhancer(element, level=update.level, active=update.active)
        return {"element": element, **enhancer.to_dict()}

    @router.post("/enhancers/{element}/toggle")
    async def toggle_enhancer(element: str):
        enhancer = lab.toggle_enhancer(element)
        return {"element": element, **enhancer.to_dict()}

    @router.post("/tick")
    async def tick(request: TickRequest):
        """Advance chaos dynamics; ``mutation`` is the recorded experiment, if any."""
        entry = lab.tick(request.time_ms)
        return {
            "chaos": lab.chaos_monitor.state.to_dict(),
            "mutation": entry.to_dict() if entry is not None else None,
        }

    @router.post("/reset")
    async def reset():
        lab.reset()
        return {"status": "reset"}

    # =========================================================================
    # Export / import
    # =========================================================================

    @router.get("/export")
    async def export_current():
        genome = lab.current_genome
        if genome is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No current genome; run an experiment first",
            )
        return build_export(genome, lab.context.rng, lab_settings=lab.status()["settings"])

    @router.post("/import")
    async def import_export(request: ImportRequest):
        result = genome_from_export(request.document)
        if result.defaulted:
            logger.info("Imported genome with %d defaulted field(s)", len(result.defaulted))
        entry = lab.import_experiment(result.genome)
        return {**entry.to_dict(), "defaulted": result.defaulted}

    return router

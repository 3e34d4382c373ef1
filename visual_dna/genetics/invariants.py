"""Cross-group invariant enforcement.

Distortion (``fx.has_distortion``) and quantum effects
(``chaos.has_quantum_effects``) must never be enabled together: the
combination is a known rendering hazard. Every producer of genomes
(factory, mutation, crossover, codec, lab overrides) calls
``enforce_invariants`` before handing a genome out.
"""

import logging
from typing import Any, Optional

from visual_dna.util.rng import RandomSource, require_rng_param

logger = logging.getLogger(__name__)


def enforce_invariants(genome: Any, rng: Optional[RandomSource] = None) -> Any:
    """Resolve conflicting feature combinations in place and return ``genome``.

    Idempotent. When both flags are set a fair coin from ``rng`` decides which
    one is cleared; no draw is made for a genome that already satisfies the
    invariant.
    """
    if not (genome.fx.has_distortion and genome.chaos.has_quantum_effects):
        return genome

    rng = require_rng_param(rng, "enforce_invariants")
    if rng.random() > 0.5:
        genome.fx.has_distortion = False
        logger.debug("Distortion and quantum effects both enabled; disabled distortion")
    else:
        genome.chaos.has_quantum_effects = False
        logger.debug("Distortion and quantum effects both enabled; disabled quantum effects")
    return genome

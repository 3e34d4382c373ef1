"""Chaos dynamics and spontaneous mutation.

While a genome is displayed, its chaos genes drive a time-varying entropy
level. Each tick may trigger a spontaneous mutation with a small probability:

    entropy = (sin(t * 0.001) + 1) / 2 * chaos_level
    mutation_probability = mutation_intensity * entropy
    trigger if can_random_mutate and u < mutation_probability * 0.001
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from visual_dna.events import EventBus, RandomMutationTriggeredEvent
from visual_dna.math_utils import finite_or
from visual_dna.scoring.quality import calculate_complexity
from visual_dna.util.rng import RandomSource, require_rng_param

logger = logging.getLogger(__name__)

# Per-tick chance scale applied to the mutation probability
TRIGGER_SCALE = 0.001


@dataclass(frozen=True)
class ChaosState:
    time: float = 0.0
    entropy: float = 0.0
    complexity: int = 0
    mutation_probability: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time": self.time,
            "entropy": self.entropy,
            "complexity": self.complexity,
            "mutation_probability": self.mutation_probability,
        }


def update_chaos_state(genome: Any, time_ms: float) -> ChaosState:
    """Chaos state of ``genome`` at ``time_ms``."""
    chaos = genome.chaos
    t = finite_or(time_ms, 0.0)
    entropy = (math.sin(t * 0.001) + 1) / 2 * finite_or(chaos.chaos_level, 0.0)
    return ChaosState(
        time=t,
        entropy=entropy,
        complexity=calculate_complexity(genome),
        mutation_probability=finite_or(chaos.mutation_intensity, 0.0) * entropy,
    )


def check_random_mutation(genome: Any, state: ChaosState, rng: RandomSource) -> bool:
    """One draw: does this tick trigger a spontaneous mutation?

    No draw is made for genomes that cannot randomly mutate.
    """
    if not genome.chaos.can_random_mutate:
        return False
    return rng.random() < state.mutation_probability * TRIGGER_SCALE


class ChaosMonitor:
    """Tracks the displayed genome's chaos state and publishes triggers.

    Args:
        event_bus: Receives ``RandomMutationTriggeredEvent``
        rng: Random source for trigger draws (required)
    """

    def __init__(self, event_bus: EventBus, rng: Optional[RandomSource] = None) -> None:
        self.event_bus = event_bus
        self.rng = require_rng_param(rng, "ChaosMonitor")
        self.genome: Optional[Any] = None
        self.state = ChaosState()

    def watch(self, genome: Any) -> None:
        """Start tracking ``genome``; the chaos state starts over."""
        self.genome = genome
        self.state = ChaosState()

    def tick(self, time_ms: float) -> bool:
        """Advance to ``time_ms``; returns True when a mutation was triggered."""
        if self.genome is None:
            return False
        self.state = update_chaos_state(self.genome, time_ms)
        if not check_random_mutation(self.genome, self.state, self.rng):
            return False
        logger.info(
            "Random mutation triggered at t=%.0f (probability %.4f)",
            self.state.time,
            self.state.mutation_probability,
        )
        self.event_bus.emit(RandomMutationTriggeredEvent(genome=self.genome, chaos_state=self.state))
        return True

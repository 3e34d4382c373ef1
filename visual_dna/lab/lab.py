"""Lab orchestration: experiments over an explicit evolution context.

``DnaLab`` ties the pieces together. Every experiment builds a genome (from
fresh entropy, by mutation, by crossover, or as a high-chaos surprise
candidate), records it through the ``EvolutionContext`` and makes it the
lab's current genome. The chaos monitor watches the current genome and may
spontaneously mutate it on ``tick``.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from visual_dna.config.lab import MAX_PARTICLE_COUNT, MAX_SHAPE_COMPLEXITY, PARTICLES_PER_COMPLEXITY, LabSettings
from visual_dna.entropy import EntropySource
from visual_dna.evolution import crossover_genomes, mutate_genome
from visual_dna.exceptions import LabError
from visual_dna.genetics import Genome
from visual_dna.genetics.factory import from_entropy
from visual_dna.genetics.invariants import enforce_invariants
from visual_dna.lab.chaos import ChaosMonitor
from visual_dna.lab.context import EvolutionContext
from visual_dna.lab.experiment import ExperimentKind, HistoryEntry

logger = logging.getLogger(__name__)

MIN_ENHANCER_LEVEL = 1
MAX_ENHANCER_LEVEL = 5

# Surprise candidates: chaos_level = base + u * spread, likewise unpredictability
SURPRISE_CHAOS_BASE = 0.8
SURPRISE_CHAOS_SPREAD = 0.2
SURPRISE_UNPREDICTABILITY_BASE = 0.9
SURPRISE_UNPREDICTABILITY_SPREAD = 0.1


# =============================================================================
# Element enhancers
# =============================================================================


@dataclass
class ElementEnhancer:
    level: int = MIN_ENHANCER_LEVEL
    active: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"level": self.level, "active": self.active}


def _raise_channel(color: Any, channel: str, amount: float) -> None:
    setattr(color, channel, int(min(255, getattr(color, channel) + amount)))


def _lower_channel(color: Any, channel: str, amount: float) -> None:
    setattr(color, channel, int(max(0, getattr(color, channel) - amount)))


def _enhance_fire(genome: Genome, level: int) -> None:
    _raise_channel(genome.color.primary, "r", level * 50)
    _raise_channel(genome.color.secondary, "r", level * 40)
    genome.fx.has_glow = True
    genome.fx.glow_intensity = min(1.0, genome.fx.glow_intensity + level * 0.4)
    genome.elemental.dominant_element = "fire"


def _enhance_ice(genome: Genome, level: int) -> None:
    _raise_channel(genome.color.primary, "b", level * 50)
    _raise_channel(genome.color.secondary, "b", level * 40)
    genome.motion.speed = max(10.0, genome.motion.speed - level * 30)
    genome.elemental.dominant_element = "ice"


def _enhance_lightning(genome: Genome, level: int) -> None:
    _raise_channel(genome.color.primary, "r", level * 40)
    _raise_channel(genome.color.primary, "g", level * 40)
    genome.particle.is_electric = True
    genome.motion.speed = min(300.0, genome.motion.speed + level * 50)
    genome.elemental.dominant_element = "lightning"


def _enhance_chaos(genome: Genome, level: int) -> None:
    genome.chaos.chaos_level = min(1.0, genome.chaos.chaos_level + level * 0.2)
    genome.chaos.can_random_mutate = True
    genome.chaos.has_quantum_effects = True
    genome.elemental.dominant_element = "chaos"


def _enhance_void(genome: Genome, level: int) -> None:
    for channel in ("r", "g", "b"):
        _lower_channel(genome.color.primary, channel, level * 30)
    genome.elemental.dominant_element = "shadow"


def _enhance_quantum(genome: Genome, level: int) -> None:
    genome.chaos.has_quantum_effects = True
    genome.chaos.quantum_coherence = min(1.0, level * 0.5)
    genome.elemental.dominant_element = "holy"


ENHANCERS: Dict[str, Callable[[Genome, int], None]] = {
    "fire": _enhance_fire,
    "ice": _enhance_ice,
    "lightning": _enhance_lightning,
    "chaos": _enhance_chaos,
    "void": _enhance_void,
    "quantum": _enhance_quantum,
}


def apply_element_enhancers(genome: Genome, enhancers: Dict[str, ElementEnhancer]) -> Genome:
    """Apply every active enhancer in registration order (in place).

    Later enhancers win on ``dominant_element``. The caller re-establishes
    the effect invariant afterwards.
    """
    for element, apply in ENHANCERS.items():
        enhancer = enhancers.get(element)
        if enhancer is not None and enhancer.active:
            apply(genome, enhancer.level)
    return genome


def apply_settings(genome: Genome, settings: LabSettings) -> Genome:
    """Apply the lab's complexity, chaos floor and mutation rate (in place)."""
    genome.shape.complexity = min(MAX_SHAPE_COMPLEXITY, settings.complexity)
    genome.particle.count = min(MAX_PARTICLE_COUNT, settings.complexity * PARTICLES_PER_COMPLEXITY)
    genome.chaos.chaos_level = max(genome.chaos.chaos_level, settings.chaos_level)
    genome.evolution.mutation_rate = settings.mutation_rate
    return genome


# =============================================================================
# Lab
# =============================================================================


class DnaLab:
    """Runs experiments and keeps track of the current genome.

    Args:
        context: Shared evolution context (a fresh one when None)
        entropy_source: Entropy collector (draws from the context RNG when None)
        chaos_monitor: Spontaneous-mutation monitor (publishes on the context bus when None)
    """

    def __init__(
        self,
        context: Optional[EvolutionContext] = None,
        *,
        entropy_source: Optional[EntropySource] = None,
        chaos_monitor: Optional[ChaosMonitor] = None,
    ) -> None:
        self.context = context or EvolutionContext()
        self.entropy_source = entropy_source or EntropySource(rng=self.context.rng)
        self.chaos_monitor = chaos_monitor or ChaosMonitor(self.context.event_bus, self.context.rng)
        self.enhancers: Dict[str, ElementEnhancer] = {name: ElementEnhancer() for name in ENHANCERS}
        self._lock = threading.RLock()
        self._current: Optional[HistoryEntry] = None

    @property
    def settings(self) -> LabSettings:
        return self.context.settings

    @property
    def current(self) -> Optional[HistoryEntry]:
        with self._lock:
            return self._current

    @property
    def current_genome(self) -> Optional[Genome]:
        current = self.current
        return current.genome if current is not None else None

    # =========================================================================
    # Experiments
    # =========================================================================

    def random_experiment(self) -> HistoryEntry:
        """Fresh genome from live entropy, enhanced and adjusted by settings."""
        genome = from_entropy(self.entropy_source.generate())
        self._enhance(genome)
        if self.settings.apply_to_new_genomes:
            apply_settings(genome, self.settings)
        return self._run(genome, ExperimentKind.RANDOM)

    def evolution_experiment(self) -> HistoryEntry:
        """Mutate the current genome at ``settings.evolution_mutation_rate``.

        Raises:
            LabError: No experiment has been run yet
        """
        parent = self._require_current("evolution")
        rate = self.settings.evolution_mutation_rate
        logger.debug(
            "Evolution mutation rate %.2f (configured %.2f)", rate, self.settings.mutation_rate
        )
        child = mutate_genome(parent, rate, rng=self.context.rng)
        return self._run(child, ExperimentKind.EVOLUTION)

    def crossover_experiment(self, partner: Optional[Genome] = None) -> HistoryEntry:
        """Cross the current genome with ``partner`` (a fresh random genome when None).

        Raises:
            LabError: No experiment has been run yet
        """
        parent = self._require_current("crossover")
        if partner is None:
            partner = from_entropy(self.entropy_source.generate())
        child = crossover_genomes(parent, partner, rng=self.context.rng)
        return self._run(child, ExperimentKind.CROSSOVER)

    def surprise_experiment(self) -> HistoryEntry:
        """High-chaos candidate with random mutation and quantum effects enabled."""
        rng = self.context.rng
        genome = from_entropy(self.entropy_source.generate())
        genome.chaos.chaos_level = SURPRISE_CHAOS_BASE + rng.random() * SURPRISE_CHAOS_SPREAD
        genome.chaos.unpredictability = (
            SURPRISE_UNPREDICTABILITY_BASE + rng.random() * SURPRISE_UNPREDICTABILITY_SPREAD
        )
        genome.chaos.can_random_mutate = True
        genome.chaos.has_quantum_effects = True
        self._enhance(genome)
        return self._run(genome, ExperimentKind.SURPRISE)

    def import_experiment(self, genome: Genome) -> HistoryEntry:
        """Record an externally supplied genome (e.g. a decoded export) as current."""
        enforce_invariants(genome, self.context.rng)
        return self._run(genome, ExperimentKind.IMPORTED)

    def tick(self, time_ms: float) -> Optional[HistoryEntry]:
        """Advance chaos dynamics; a triggered mutation is recorded and returned."""
        current = self.current
        if current is None or not self.chaos_monitor.tick(time_ms):
            return None
        genome = current.genome
        child = mutate_genome(genome, genome.evolution.mutation_rate, rng=self.context.rng)
        return self._run(child, ExperimentKind.CHAOS_MUTATION)

    def _require_current(self, operation: str) -> Genome:
        genome = self.current_genome
        if genome is None:
            raise LabError(f"Run a random experiment before starting {operation}")
        return genome

    def _enhance(self, genome: Genome) -> None:
        with self._lock:
            apply_element_enhancers(genome, self.enhancers)
        enforce_invariants(genome, self.context.rng)

    def _run(self, genome: Genome, kind: ExperimentKind) -> HistoryEntry:
        entry = self.context.record(genome, kind)
        with self._lock:
            self._current = entry
        self.chaos_monitor.watch(genome)
        logger.info(
            "%s experiment %s: quality %.3f (%s)",
            kind.value,
            entry.experiment_id,
            entry.quality_score,
            entry.quality_tier.value,
        )
        return entry

    # =========================================================================
    # Settings and enhancers
    # =========================================================================

    def update_settings(self, **changes: Any) -> LabSettings:
        """Replace selected settings; history caps resize the context histories.

        Raises:
            ConfigurationError: Invalid history size
            TypeError: Unknown setting name
        """
        with self._lock:
            current = self.settings
            merged = {**current.__dict__, **changes}
            updated = LabSettings(**merged)
            self.context.settings = updated
            if (
                updated.max_history_size != current.max_history_size
                or updated.max_surprise_size != current.max_surprise_size
            ):
                self.context.resize(updated.max_history_size, updated.max_surprise_size)
        logger.info("Lab settings updated: %s", sorted(changes))
        return updated

    def _enhancer(self, element: str) -> ElementEnhancer:
        enhancer = self.enhancers.get(element)
        if enhancer is None:
            raise LabError(f"Unknown element enhancer: {element!r}")
        return enhancer

    def toggle_enhancer(self, element: str) -> ElementEnhancer:
        with self._lock:
            enhancer = self._enhancer(element)
            enhancer.active = not enhancer.active
        logger.debug("Enhancer %s %s", element, "enabled" if enhancer.active else "disabled")
        return enhancer

    def set_enhancer(
        self, element: str, *, level: Optional[int] = None, active: Optional[bool] = None
    ) -> ElementEnhancer:
        """Set an enhancer's level (clamped to 1-5) and/or active flag."""
        with self._lock:
            enhancer = self._enhancer(element)
            if level is not None:
                enhancer.level = max(MIN_ENHANCER_LEVEL, min(MAX_ENHANCER_LEVEL, int(level)))
            if active is not None:
                enhancer.active = bool(active)
        return enhancer

    # =========================================================================
    # Status
    # =========================================================================

    def status(self) -> Dict[str, Any]:
        """Snapshot of settings, enhancers, statistics and the current experiment."""
        current = self.current
        with self._lock:
            enhancers = {name: enhancer.to_dict() for name, enhancer in self.enhancers.items()}
        return {
            "settings": dict(self.settings.__dict__),
            "enhancers": enhancers,
            "stats": self.context.stats().to_dict(),
            "current": current.to_dict(include_genome=False) if current is not None else None,
            "chaos": self.chaos_monitor.state.to_dict(),
        }

    def reset(self) -> None:
        """Forget the current genome and clear the context."""
        with self._lock:
            self._current = None
        self.context.reset()
        self.chaos_monitor.watch(None)

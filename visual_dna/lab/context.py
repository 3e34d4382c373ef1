"""Evolution context: the lab's shared, lock-protected state.

The context owns everything that outlives a single experiment:

- the RNG every operation draws from
- the full experiment history and the surprise-only history (both bounded)
- the running maximum complexity consulted by surprise detection
- aggregate statistics
- the event bus surprises are published on

Pass it explicitly to whatever needs history or running-maximum access; there
is no process-wide instance. ``record`` scores, classifies and stores an
experiment in one critical section, so concurrent callers never observe a
history/running-maximum pair that disagree.
"""

from __future__ import annotations

import logging
import random as pyrandom
import threading
from dataclasses import dataclass
from typing import Any, List, Optional

from visual_dna.config.lab import LabSettings
from visual_dna.config.scoring import DEFAULT_SCORING_CONFIG, ScoringConfig
from visual_dna.events import EventBus, ExperimentRecordedEvent, SurpriseDiscoveredEvent
from visual_dna.genetics.lineage import now_ms
from visual_dna.lab.experiment import BoundedHistory, ExperimentKind, HistoryEntry, new_experiment_id
from visual_dna.scoring.quality import QualityScorer, calculate_complexity, quality_tier
from visual_dna.scoring.surprise import SurpriseDetector
from visual_dna.scoring.uniqueness import UniquenessEvaluator, genome_signature
from visual_dna.util.rng import RandomSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LabStats:
    """Aggregate statistics since the context was created (or reset)."""

    total_experiments: int
    surprise_count: int
    surprise_rate: float
    average_quality: float
    top_complexity: float
    history_size: int
    surprise_history_size: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_experiments": self.total_experiments,
            "surprise_count": self.surprise_count,
            "surprise_rate": self.surprise_rate,
            "average_quality": self.average_quality,
            "top_complexity": self.top_complexity,
            "history_size": self.history_size,
            "surprise_history_size": self.surprise_history_size,
        }


class EvolutionContext:
    """Histories, running maximum, statistics and RNG for one lab.

    Args:
        rng: Random source for every draw; a fresh ``random.Random`` when None
        settings: Lab settings (history caps are read from here)
        scoring: Scoring weights and thresholds
        event_bus: Bus for recorded/surprise events (a private one when None)
    """

    def __init__(
        self,
        *,
        rng: Optional[RandomSource] = None,
        settings: Optional[LabSettings] = None,
        scoring: Optional[ScoringConfig] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.rng: RandomSource = rng if rng is not None else pyrandom.Random()
        self.settings = settings or LabSettings()
        self.scoring = scoring or DEFAULT_SCORING_CONFIG
        self.event_bus = event_bus or EventBus()

        self.uniqueness_evaluator = UniquenessEvaluator(self.scoring)
        self.quality_scorer = QualityScorer(self.scoring, self.uniqueness_evaluator)
        self.surprise_detector = SurpriseDetector(self.scoring.surprise)

        self._lock = threading.RLock()
        self._history: BoundedHistory[HistoryEntry] = BoundedHistory(self.settings.max_history_size)
        self._surprises: BoundedHistory[HistoryEntry] = BoundedHistory(
            self.settings.max_surprise_size
        )
        self._running_max_complexity = 0.0
        self._total_experiments = 0
        self._surprise_count = 0
        self._quality_sum = 0.0

    # =========================================================================
    # Recording
    # =========================================================================

    def record(self, genome: Any, kind: ExperimentKind = ExperimentKind.RANDOM) -> HistoryEntry:
        """Score, classify and store one genome.

        Sets ``genome.quality_score``. Publishes ``ExperimentRecordedEvent``
        and, for surprises, ``SurpriseDiscoveredEvent`` after the lock is
        released.
        """
        with self._lock:
            signatures = [entry.signature for entry in self._history]
            complexity = calculate_complexity(genome)
            uniqueness = self.uniqueness_evaluator.uniqueness(genome, signatures)
            report = self.quality_scorer.evaluate(genome, complexity, uniqueness=uniqueness)
            surprise = self.surprise_detector.detect_genome(
                genome,
                quality=report.total,
                complexity=complexity,
                uniqueness=report.uniqueness,
                running_max_complexity=self._running_max_complexity,
            )
            self._running_max_complexity = surprise.running_max_complexity

            genome.quality_score = report.total
            timestamp = now_ms()
            entry = HistoryEntry(
                experiment_id=new_experiment_id(timestamp, self.rng),
                kind=kind,
                signature=genome_signature(genome),
                genome=genome,
                quality_score=report.total,
                complexity=complexity,
                uniqueness=report.uniqueness,
                is_surprise=surprise.is_surprise,
                surprise_score=surprise.score,
                reasons=surprise.reasons,
                quality_tier=quality_tier(report.total, self.scoring.tiers),
                timestamp=timestamp,
                report=report,
            )

            self._history.add(entry)
            self._total_experiments += 1
            self._quality_sum += report.total
            if entry.is_surprise:
                self._surprises.add(entry)
                self._surprise_count += 1

        logger.debug(
            "Recorded %s experiment %s: quality=%.3f complexity=%d",
            kind.value,
            entry.signature,
            entry.quality_score,
            entry.complexity,
        )
        self.event_bus.emit(ExperimentRecordedEvent(experiment=entry))
        if entry.is_surprise:
            logger.info(
                "Surprise discovered: %s (score %.2f; %s)",
                entry.signature,
                entry.surprise_score,
                ", ".join(entry.reasons),
            )
            self.event_bus.emit(SurpriseDiscoveredEvent(experiment=entry))
        return entry

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def running_max_complexity(self) -> float:
        with self._lock:
            return self._running_max_complexity

    def history(self) -> List[HistoryEntry]:
        """Recorded experiments, newest first."""
        with self._lock:
            return self._history.to_list()

    def surprises(self) -> List[HistoryEntry]:
        """Surprising experiments, newest first."""
        with self._lock:
            return self._surprises.to_list()

    def signatures(self) -> List[str]:
        with self._lock:
            return [entry.signature for entry in self._history]

    def find(self, experiment_id: str) -> Optional[HistoryEntry]:
        with self._lock:
            for entry in self._history:
                if entry.experiment_id == experiment_id:
                    return entry
            for entry in self._surprises:
                if entry.experiment_id == experiment_id:
                    return entry
        return None

    def stats(self) -> LabStats:
        with self._lock:
            total = self._total_experiments
            return LabStats(
                total_experiments=total,
                surprise_count=self._surprise_count,
                surprise_rate=self._surprise_count / total if total else 0.0,
                average_quality=self._quality_sum / total if total else 0.0,
                top_complexity=self._running_max_complexity,
                history_size=len(self._history),
                surprise_history_size=len(self._surprises),
            )

    # =========================================================================
    # Maintenance
    # =========================================================================

    def resize(self, max_history_size: int, max_surprise_size: int) -> None:
        """Change history caps, keeping the newest entries that still fit."""
        with self._lock:
            self._history = self._resized(self._history, max_history_size)
            self._surprises = self._resized(self._surprises, max_surprise_size)

    @staticmethod
    def _resized(history: BoundedHistory[HistoryEntry], capacity: int) -> BoundedHistory[HistoryEntry]:
        resized: BoundedHistory[HistoryEntry] = BoundedHistory(capacity)
        for entry in reversed(history.to_list()[:capacity]):
            resized.add(entry)
        return resized

    def reset(self) -> None:
        """Clear histories, statistics and the running maximum."""
        with self._lock:
            self._history.clear()
            self._surprises.clear()
            self._running_max_complexity = 0.0
            self._total_experiments = 0
            self._surprise_count = 0
            self._quality_sum = 0.0
        logger.info("Evolution context reset")

"""Lab event definitions.

Events are frozen dataclasses carrying everything a handler needs. The
genome and history entries they reference must be treated as read-only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RandomMutationTriggeredEvent:
    """Chaos dynamics decided the current genome should mutate spontaneously.

    Attributes:
        genome: The genome that triggered the mutation
        chaos_state: Snapshot of the chaos state at trigger time
    """

    genome: Any
    chaos_state: Any


@dataclass(frozen=True)
class SurpriseDiscoveredEvent:
    """An experiment was classified as a surprise.

    Attributes:
        experiment: The recorded ``HistoryEntry``
    """

    experiment: Any


@dataclass(frozen=True)
class ExperimentRecordedEvent:
    """Any experiment (surprising or not) was scored and recorded."""

    experiment: Any

"""Events module: the EventBus plus typed lab events."""

from visual_dna.events.domain_events import (
    ExperimentRecordedEvent,
    RandomMutationTriggeredEvent,
    SurpriseDiscoveredEvent,
)
from visual_dna.events.event_bus import EventBus

__all__ = [
    "EventBus",
    "ExperimentRecordedEvent",
    "RandomMutationTriggeredEvent",
    "SurpriseDiscoveredEvent",
]

"""Evolution context, experiment records, chaos dynamics and the lab itself."""

from visual_dna.lab.chaos import ChaosMonitor, ChaosState, check_random_mutation, update_chaos_state
from visual_dna.lab.context import EvolutionContext, LabStats
from visual_dna.lab.experiment import BoundedHistory, ExperimentKind, HistoryEntry
from visual_dna.lab.lab import DnaLab, ElementEnhancer, apply_element_enhancers, apply_settings

__all__ = [
    "BoundedHistory",
    "ChaosMonitor",
    "ChaosState",
    "DnaLab",
    "ElementEnhancer",
    "EvolutionContext",
    "ExperimentKind",
    "HistoryEntry",
    "LabStats",
    "apply_element_enhancers",
    "apply_settings",
    "check_random_mutation",
    "update_chaos_state",
]

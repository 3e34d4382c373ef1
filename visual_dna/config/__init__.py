"""Configuration package for the visual DNA lab.

Configuration lives in small dataclass modules grouped by concern:

- lab: experiment settings, history caps, evolution floors
- scoring: quality weights, tier thresholds, surprise thresholds
- server: HTTP API defaults
"""

from visual_dna.config.lab import DEFAULT_HISTORY_SIZE, LabSettings
from visual_dna.config.scoring import DEFAULT_SCORING_CONFIG, ScoringConfig, SurpriseThresholds

__all__ = [
    "DEFAULT_HISTORY_SIZE",
    "DEFAULT_SCORING_CONFIG",
    "LabSettings",
    "ScoringConfig",
    "SurpriseThresholds",
]

"""Shared utilities for the visual DNA lab."""

from visual_dna.util.rng import MissingRNGError, require_rng_param

__all__ = [
    "MissingRNGError",
    "require_rng_param",
]

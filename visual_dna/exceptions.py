"""Visual DNA exception hierarchy.

Centralised base classes so callers can catch lab failures narrowly instead
of relying on bare ``except Exception`` blocks.
"""


class VisualDnaError(Exception):
    """Root of all visual DNA domain exceptions."""


class GeneticsError(VisualDnaError):
    """Genome generation, encoding, decoding, or mutation failure."""


class InvalidGenomeError(GeneticsError):
    """A genome failed validation (see ``Genome.assert_valid``)."""


class LabError(VisualDnaError):
    """An experiment could not be started or recorded."""


class ConfigurationError(VisualDnaError):
    """Invalid or missing configuration."""

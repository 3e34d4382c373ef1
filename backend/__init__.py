"""Backend package for the Visual DNA Lab API.

This package provides the FastAPI application exposing genome generation,
evolution operators, scoring and the stateful lab.
"""

__version__ = "1.0.0"

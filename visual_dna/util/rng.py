"""RNG utilities for deterministic generation.

Every operation that draws random numbers takes an explicit RNG. These helpers
fail loudly when one is missing instead of silently creating an unseeded
fallback, so non-determinism is caught at the call site.
"""

import random
from typing import Optional, Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """The subset of ``random.Random`` the lab relies on.

    Tests can supply any object with these methods (for example a
    fixed-sequence fake) to assert exact outputs.
    """

    def random(self) -> float: ...

    def choice(self, seq: Sequence[T]) -> T: ...


class MissingRNGError(RuntimeError):
    """Raised when an RNG is required but not available.

    This error indicates a bug in the caller - every generation, mutation and
    crossover path should receive the lab's RNG explicitly.
    """
    pass


def require_rng_param(rng: Optional[RandomSource], context: str) -> RandomSource:
    """Validate that an RNG parameter was provided, failing loudly if not.

    Args:
        rng: The RNG that should have been provided
        context: Description of where this is called from (for error messages)

    Returns:
        The validated RNG

    Raises:
        MissingRNGError: If rng is None

    Example:
        def mutate_genome(genome, rate, *, rng=None):
            _rng = require_rng_param(rng, "mutate_genome")
    """
    if rng is None:
        raise MissingRNGError(
            f"RNG required: {context}. Pass the lab/context RNG explicitly."
        )
    return rng


def derived_rng(seed: float, salt: int = 0) -> random.Random:
    """Create a deterministic ``random.Random`` from a numeric seed.

    Used where a pure function of the seed still needs coin flips (invariant
    resolution inside the gene factory).
    """
    return random.Random(f"{float(seed)!r}:{salt}")

"""Pytest configuration and fixtures for visual DNA tests."""

import random

import pytest

FIXED_TIMESTAMP = 1_700_000_000_000


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def genome_42():
    """Genome for seed 42 with a fixed creation time."""
    from visual_dna.genetics import from_seed

    return from_seed(42, timestamp=FIXED_TIMESTAMP)


@pytest.fixture
def entropy_record():
    """A fully specified entropy record (no live sources)."""
    from visual_dna.entropy import (
        EntropyRecord,
        HostSample,
        PointerSample,
        QuantumEntropy,
        QuantumState,
    )

    return EntropyRecord.from_sources(
        timestamp=FIXED_TIMESTAMP,
        random_value=0.25,
        pointer=PointerSample(x=120.0, y=340.0, velocity=3.5),
        host=HostSample(performance=512.0, memory=8.0, screen=1234.0, agent=42.0),
        quantum=QuantumEntropy(
            states=(
                QuantumState(superposition=True, phase=1.0),
                QuantumState(superposition=False, phase=2.0),
            ),
            coherence=0.75,
            entanglement=0.1,
        ),
    )


@pytest.fixture
def context(seeded_rng):
    """Evolution context with a deterministic RNG."""
    from visual_dna.lab import EvolutionContext

    return EvolutionContext(rng=seeded_rng)


@pytest.fixture
def lab(context):
    """Lab with a deterministic RNG and a fixed clock."""
    from visual_dna.entropy import EntropySource
    from visual_dna.lab import DnaLab

    source = EntropySource(
        rng=context.rng,
        clock=lambda: FIXED_TIMESTAMP / 1000,
        perf_counter=lambda: 12.345,
    )
    return DnaLab(context, entropy_source=source)

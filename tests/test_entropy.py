"""Tests for entropy collection and chaos seed derivation."""

import random

import pytest

from tests.fakes.fake_rng import SequenceRng
from visual_dna.entropy import (
    CHAOS_SEED_MODULUS,
    EntropyRecord,
    EntropySource,
    HostSample,
    PointerSample,
    PointerTracker,
    QuantumEntropy,
    QuantumState,
    derive_chaos_seed,
)
from visual_dna.util.rng import MissingRNGError


def _quantum(*states, coherence=0.5, entanglement=0.0):
    return QuantumEntropy(states=tuple(states), coherence=coherence, entanglement=entanglement)


def _fixed_source(seed):
    return EntropySource(
        rng=random.Random(seed),
        clock=lambda: 1_700_000_000.5,
        perf_counter=lambda: 1.5,
    )


class TestChaosSeed:
    def test_record_seed_in_range(self, entropy_record):
        assert 0.0 <= entropy_record.chaos_seed < CHAOS_SEED_MODULUS

    def test_seed_is_pure(self, entropy_record):
        again = EntropyRecord.from_sources(
            timestamp=entropy_record.timestamp,
            random_value=entropy_record.random,
            pointer=entropy_record.pointer,
            host=entropy_record.host,
            quantum=entropy_record.quantum,
        )
        assert again == entropy_record

    def test_weighted_sum_without_quantum_states(self):
        seed = derive_chaos_seed(
            timestamp=1,
            microseconds=1,
            random_value=1.0,
            pointer=PointerSample(x=1.0, y=1.0, velocity=1.0),
            host=HostSample(performance=1.0, memory=1.0, screen=1.0, agent=1.0),
            quantum=_quantum(),
        )
        assert seed == pytest.approx(37 + 73 + 97 + 13 + 19 + 29 + 23 + 31 + 41 + 43)

    def test_superposition_multiplies_by_golden_ratio(self):
        zero_pointer = PointerSample(x=0.0, y=0.0, velocity=0.0)
        zero_host = HostSample(performance=0.0, memory=0.0, screen=0.0, agent=0.0)
        plain = derive_chaos_seed(
            timestamp=10,
            microseconds=0,
            random_value=0.0,
            pointer=zero_pointer,
            host=zero_host,
            quantum=_quantum(QuantumState(superposition=False, phase=0.0)),
        )
        boosted = derive_chaos_seed(
            timestamp=10,
            microseconds=0,
            random_value=0.0,
            pointer=zero_pointer,
            host=zero_host,
            quantum=_quantum(QuantumState(superposition=True, phase=0.0)),
        )
        assert plain == pytest.approx(370.0)
        assert boosted == pytest.approx(370.0 * 1.618)

    def test_non_finite_input_gives_zero(self):
        seed = derive_chaos_seed(
            timestamp=0,
            microseconds=0,
            random_value=float("nan"),
            pointer=PointerSample(x=0.0, y=0.0, velocity=0.0),
            host=HostSample(performance=0.0, memory=0.0, screen=0.0, agent=0.0),
            quantum=_quantum(),
        )
        assert seed == 0.0

    def test_coherence_shortcut(self, entropy_record):
        assert entropy_record.coherence == 0.75


class TestRecordSerialization:
    def test_round_trip(self, entropy_record):
        assert EntropyRecord.from_dict(entropy_record.to_dict()) == entropy_record

    def test_malformed_record_raises(self, entropy_record):
        data = entropy_record.to_dict()
        del data["host"]
        with pytest.raises(KeyError):
            EntropyRecord.from_dict(data)


class TestEntropySource:
    def test_generate_is_reproducible_with_fixed_inputs(self):
        assert _fixed_source(1).generate() == _fixed_source(1).generate()

    def test_generate_uses_clock(self):
        record = _fixed_source(1).generate()
        assert record.timestamp == 1_700_000_000_500
        assert record.microseconds == 500
        assert len(record.quantum.states) == 10

    def test_different_draws_give_different_seeds(self):
        assert _fixed_source(1).generate().chaos_seed != _fixed_source(2).generate().chaos_seed

    def test_requires_rng(self):
        with pytest.raises(MissingRNGError):
            EntropySource().generate()

    def test_quantum_sample_draws(self):
        source = EntropySource(rng=SequenceRng([0.75]), quantum_state_count=2)
        quantum = source.quantum_sample()
        assert all(state.superposition for state in quantum.states)
        assert quantum.coherence == 0.75
        assert quantum.entanglement == pytest.approx(0.5625)


class TestPointerTracker:
    def test_straight_line_has_no_chaos(self):
        tracker = PointerTracker()
        for i in range(6):
            tracker.record(float(i), float(i), float(i * 10))
        assert tracker.chaos_level() == 0.0

    def test_zigzag_has_chaos(self):
        tracker = PointerTracker()
        for i, (x, y) in enumerate([(0, 0), (1, 1), (2, 0), (3, 1), (4, 0)]):
            tracker.record(float(x), float(y), float(i * 10))
        chaos = tracker.chaos_level()
        assert 0.0 < chaos <= 1.0

    def test_short_history_has_no_chaos(self):
        tracker = PointerTracker()
        for i in range(4):
            tracker.record(float(i), float(i % 2), float(i))
        assert tracker.chaos_level() == 0.0

    def test_history_is_bounded(self):
        tracker = PointerTracker(max_history=3)
        for i in range(10):
            tracker.record(float(i), 0.0, float(i))
        assert len(tracker) == 3

    def test_sample_summarizes_movement(self):
        tracker = PointerTracker()
        tracker.record(0.0, 0.0, 0.0)
        tracker.record(3.0, 4.0, 10.0)
        sample = tracker.sample(SequenceRng([0.5]))
        assert (sample.x, sample.y) == (3.0, 4.0)
        # velocities 0 and 5/10
        assert sample.velocity == pytest.approx(0.25)

    def test_empty_tracker_falls_back_to_random(self):
        sample = PointerTracker().sample(SequenceRng([0.5]))
        assert (sample.x, sample.y, sample.velocity) == (500.0, 500.0, 50.0)

"""Tests for chaos dynamics and spontaneous mutation triggers."""

import math

import pytest

from tests.fakes.fake_rng import ForbiddenRng, SequenceRng
from visual_dna.events import EventBus, RandomMutationTriggeredEvent
from visual_dna.lab import ChaosMonitor, ChaosState, check_random_mutation, update_chaos_state
from visual_dna.util.rng import MissingRNGError


class TestUpdateChaosState:
    def test_formula(self, genome_42):
        genome_42.chaos.chaos_level = 0.8
        genome_42.chaos.mutation_intensity = 0.5
        t = 1500.0
        state = update_chaos_state(genome_42, t)
        entropy = (math.sin(1.5) + 1) / 2 * 0.8
        assert state.time == t
        assert state.entropy == pytest.approx(entropy)
        assert state.mutation_probability == pytest.approx(0.5 * entropy)
        assert state.complexity == genome_42.complexity

    def test_zero_chaos_means_no_entropy(self, genome_42):
        genome_42.chaos.chaos_level = 0.0
        assert update_chaos_state(genome_42, 1234.0).entropy == 0.0

    def test_non_finite_time(self, genome_42):
        state = update_chaos_state(genome_42, math.nan)
        assert state.time == 0.0
        assert state.entropy == pytest.approx(genome_42.chaos.chaos_level / 2)


class TestCheckRandomMutation:
    def test_no_draw_when_mutation_disabled(self, genome_42):
        genome_42.chaos.can_random_mutate = False
        state = ChaosState(mutation_probability=1.0)
        assert check_random_mutation(genome_42, state, ForbiddenRng()) is False

    def test_trigger_threshold_is_scaled(self, genome_42):
        genome_42.chaos.can_random_mutate = True
        state = ChaosState(mutation_probability=0.5)
        assert check_random_mutation(genome_42, state, SequenceRng([0.0004])) is True
        assert check_random_mutation(genome_42, state, SequenceRng([0.0006])) is False


class TestChaosMonitor:
    def test_requires_rng(self):
        with pytest.raises(MissingRNGError):
            ChaosMonitor(EventBus())

    def test_idle_without_genome(self):
        monitor = ChaosMonitor(EventBus(), ForbiddenRng())
        assert monitor.tick(1000.0) is False

    def test_trigger_emits_event(self, genome_42):
        bus = EventBus()
        events = []
        bus.subscribe(RandomMutationTriggeredEvent, events.append)
        genome_42.chaos.can_random_mutate = True
        genome_42.chaos.chaos_level = 1.0
        genome_42.chaos.mutation_intensity = 1.0
        monitor = ChaosMonitor(bus, SequenceRng([0.0]))
        monitor.watch(genome_42)

        assert monitor.tick(1500.0) is True
        assert len(events) == 1
        assert events[0].genome is genome_42
        assert events[0].chaos_state is monitor.state

    def test_no_event_without_trigger(self, genome_42):
        bus = EventBus()
        events = []
        bus.subscribe(RandomMutationTriggeredEvent, events.append)
        monitor = ChaosMonitor(bus, SequenceRng([0.99]))
        monitor.watch(genome_42)
        assert monitor.tick(1500.0) is False
        assert events == []
        assert monitor.state.time == 1500.0

    def test_watch_resets_state(self, genome_42):
        monitor = ChaosMonitor(EventBus(), SequenceRng([0.99]))
        monitor.watch(genome_42)
        monitor.tick(500.0)
        monitor.watch(None)
        assert monitor.state == ChaosState()

"""Tests for the evolution context and bounded histories."""

import random
import re

import pytest

from visual_dna.config.lab import LabSettings
from visual_dna.config.scoring import ScoringConfig, SurpriseThresholds
from visual_dna.events import EventBus, ExperimentRecordedEvent, SurpriseDiscoveredEvent
from visual_dna.genetics import from_seed
from visual_dna.lab import BoundedHistory, EvolutionContext, ExperimentKind

ALWAYS_SURPRISE = ScoringConfig(surprise=SurpriseThresholds(surprise_cutoff=-1.0))


class TestBoundedHistory:
    def test_newest_first_and_eviction(self):
        history = BoundedHistory(3)
        evicted = [history.add(i) for i in range(5)]
        assert history.to_list() == [4, 3, 2]
        assert evicted == [None, None, None, 0, 1]
        assert history.newest() == 4

    def test_capacity_must_be_positive(self):
        with pytest.raises(ValueError):
            BoundedHistory(0)

    def test_clear(self):
        history = BoundedHistory(2)
        history.add("a")
        history.clear()
        assert len(history) == 0
        assert history.newest() is None


class TestRecord:
    def test_entry_fields(self, context, genome_42):
        entry = context.record(genome_42)
        assert re.fullmatch(r"exp_\d+_[0-9a-z]{9}", entry.experiment_id)
        assert entry.kind is ExperimentKind.RANDOM
        assert entry.signature == genome_42.signature
        assert entry.complexity == 96
        assert 0.0 <= entry.quality_score <= 1.0
        assert genome_42.quality_score == entry.quality_score
        assert entry.genome is genome_42

    def test_first_experiment_sets_running_max(self, context, genome_42):
        entry = context.record(genome_42)
        assert "complexity breakthrough" in entry.reasons
        assert context.running_max_complexity == 96

    def test_duplicate_lowers_uniqueness(self, context):
        first = context.record(from_seed(42))
        second = context.record(from_seed(42))
        assert second.uniqueness < first.uniqueness

    def test_ids_are_unique(self, context):
        ids = {context.record(from_seed(seed)).experiment_id for seed in range(8)}
        assert len(ids) == 8

    def test_history_cap_with_every_experiment_a_surprise(self):
        context = EvolutionContext(rng=random.Random(1), scoring=ALWAYS_SURPRISE)
        entries = [context.record(from_seed(seed)) for seed in range(12)]

        history = context.history()
        assert len(history) == 10
        assert history[0] is entries[-1]
        assert history[-1] is entries[2]
        assert len(context.surprises()) == 10

        stats = context.stats()
        assert stats.total_experiments == 12
        assert stats.surprise_count == 12
        assert stats.surprise_rate == 1.0
        assert stats.history_size == 10

    def test_find(self, context, genome_42):
        entry = context.record(genome_42)
        assert context.find(entry.experiment_id) is entry
        assert context.find("exp_0_missing") is None

    def test_find_surprise_evicted_from_history(self):
        settings = LabSettings(max_history_size=1, max_surprise_size=5)
        context = EvolutionContext(rng=random.Random(1), settings=settings, scoring=ALWAYS_SURPRISE)
        first = context.record(from_seed(1))
        context.record(from_seed(2))
        assert context.find(first.experiment_id) is first


class TestEvents:
    def test_recorded_and_surprise_events(self, genome_42):
        bus = EventBus()
        recorded, surprises = [], []
        bus.subscribe(ExperimentRecordedEvent, recorded.append)
        bus.subscribe(SurpriseDiscoveredEvent, surprises.append)
        context = EvolutionContext(rng=random.Random(1), scoring=ALWAYS_SURPRISE, event_bus=bus)

        entry = context.record(genome_42, ExperimentKind.SURPRISE)

        assert [event.experiment for event in recorded] == [entry]
        assert [event.experiment for event in surprises] == [entry]

    def test_no_surprise_event_below_cutoff(self, genome_42):
        bus = EventBus()
        surprises = []
        bus.subscribe(SurpriseDiscoveredEvent, surprises.append)
        cautious = ScoringConfig(surprise=SurpriseThresholds(surprise_cutoff=5.0))
        context = EvolutionContext(rng=random.Random(1), scoring=cautious, event_bus=bus)
        assert not context.record(genome_42).is_surprise
        assert surprises == []

    def test_unsubscribe(self):
        bus = EventBus()
        handler = lambda event: None  # noqa: E731
        bus.subscribe(ExperimentRecordedEvent, handler)
        assert bus.subscriber_count(ExperimentRecordedEvent) == 1
        assert bus.unsubscribe(ExperimentRecordedEvent, handler)
        assert not bus.unsubscribe(ExperimentRecordedEvent, handler)


class TestMaintenance:
    def test_stats_when_empty(self, context):
        stats = context.stats()
        assert stats.total_experiments == 0
        assert stats.surprise_rate == 0.0
        assert stats.average_quality == 0.0

    def test_average_quality(self, context):
        entries = [context.record(from_seed(seed)) for seed in (1, 2, 3)]
        expected = sum(entry.quality_score for entry in entries) / 3
        assert context.stats().average_quality == pytest.approx(expected)

    def test_resize_keeps_newest(self, context):
        entries = [context.record(from_seed(seed)) for seed in range(6)]
        context.resize(3, 3)
        assert context.history() == list(reversed(entries))[:3]
        context.record(from_seed(99))
        assert len(context.history()) == 3

    def test_reset(self, context, genome_42):
        context.record(genome_42)
        context.reset()
        assert context.history() == []
        assert context.surprises() == []
        assert context.running_max_complexity == 0.0
        assert context.stats().total_experiments == 0

    def test_entry_to_dict(self, context, genome_42):
        data = context.record(genome_42).to_dict(include_genome=False)
        assert data["kind"] == "random"
        assert "genome" not in data
        assert set(data["scores"]) == {
            "complexity",
            "color_harmony",
            "motion_flow",
            "visual_balance",
            "uniqueness",
            "total",
        }

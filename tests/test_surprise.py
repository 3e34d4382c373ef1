"""Tests for surprise classification."""

import math

import pytest

from visual_dna.config.scoring import SurpriseThresholds
from visual_dna.scoring import SurpriseDetector
from visual_dna.scoring.surprise import (
    REASON_COMPLEXITY_BREAKTHROUGH,
    REASON_EXCEPTIONAL_QUALITY,
    REASON_EXTREME_UNIQUENESS,
    REASON_ORDER_WITHIN_CHAOS,
    REASON_QUANTUM_SUCCESS,
)


def _detect(**overrides):
    inputs = dict(
        quality=0.5,
        complexity=10.0,
        uniqueness=0.5,
        chaos_level=0.2,
        quantum_effects=False,
        running_max_complexity=100.0,
    )
    inputs.update(overrides)
    return SurpriseDetector().detect(**inputs)


class TestClassification:
    def test_quality_plus_breakthrough_is_surprise(self):
        # 0.4 + 0.3 lands just above the 0.7 cutoff in binary floating point
        result = _detect(quality=0.9, complexity=130.0, running_max_complexity=100.0)
        assert result.is_surprise
        assert result.reasons == (REASON_EXCEPTIONAL_QUALITY, REASON_COMPLEXITY_BREAKTHROUGH)
        assert result.breakthrough

    def test_quality_alone_is_not_surprise(self):
        result = _detect(quality=0.9)
        assert not result.is_surprise
        assert result.score == pytest.approx(0.4)

    def test_quality_threshold_is_exclusive(self):
        result = _detect(quality=0.85)
        assert REASON_EXCEPTIONAL_QUALITY not in result.reasons
        assert result.score == 0.0

    def test_breakthrough_needs_twenty_percent(self):
        assert not _detect(complexity=119.0).breakthrough
        assert _detect(complexity=121.0).breakthrough

    def test_zero_complexity_against_zero_max(self):
        result = _detect(complexity=0.0, running_max_complexity=0.0)
        assert not result.breakthrough
        assert result.running_max_complexity == 0.0

    def test_first_positive_complexity_is_breakthrough(self):
        result = _detect(complexity=5.0, running_max_complexity=0.0)
        assert result.breakthrough
        assert result.running_max_complexity == 5.0

    def test_running_max_unchanged_without_breakthrough(self):
        assert _detect(complexity=110.0).running_max_complexity == 100.0


class TestReasons:
    def test_every_reason_in_order(self):
        result = _detect(
            quality=0.95,
            complexity=500.0,
            uniqueness=1.2,
            chaos_level=0.9,
            quantum_effects=True,
        )
        assert result.reasons == (
            REASON_EXCEPTIONAL_QUALITY,
            REASON_COMPLEXITY_BREAKTHROUGH,
            REASON_EXTREME_UNIQUENESS,
            REASON_ORDER_WITHIN_CHAOS,
            REASON_QUANTUM_SUCCESS,
        )
        # 0.4 + 0.3 + 0.3 + 0.15 + 0.1 = 1.25, clamped
        assert result.score == 1.0
        assert result.is_surprise

    def test_order_within_chaos_needs_quality(self):
        assert REASON_ORDER_WITHIN_CHAOS not in _detect(chaos_level=0.9, quality=0.6).reasons
        assert REASON_ORDER_WITHIN_CHAOS in _detect(chaos_level=0.9, quality=0.61).reasons

    def test_quantum_needs_quality(self):
        assert REASON_QUANTUM_SUCCESS not in _detect(quantum_effects=True, quality=0.7).reasons
        assert REASON_QUANTUM_SUCCESS in _detect(quantum_effects=True, quality=0.75).reasons

    def test_non_finite_inputs(self):
        result = _detect(uniqueness=math.nan, complexity=math.inf, running_max_complexity=math.nan)
        assert REASON_EXTREME_UNIQUENESS not in result.reasons
        assert not math.isnan(result.score)


def test_deterministic():
    assert _detect(quality=0.9, complexity=200.0) == _detect(quality=0.9, complexity=200.0)


def test_custom_cutoff():
    detector = SurpriseDetector(SurpriseThresholds(surprise_cutoff=-1.0))
    result = detector.detect(
        quality=0.0,
        complexity=0.0,
        uniqueness=0.0,
        chaos_level=0.0,
        quantum_effects=False,
        running_max_complexity=0.0,
    )
    assert result.is_surprise
    assert result.reasons == ()


def test_detect_genome_reads_chaos_genes(genome_42):
    genome_42.chaos.chaos_level = 0.95
    genome_42.chaos.has_quantum_effects = True
    result = SurpriseDetector().detect_genome(
        genome_42, quality=0.8, complexity=1.0, uniqueness=0.0, running_max_complexity=50.0
    )
    assert result.reasons == (REASON_ORDER_WITHIN_CHAOS, REASON_QUANTUM_SUCCESS)

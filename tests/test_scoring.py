"""Tests for quality, complexity and uniqueness scoring."""

import math

import pytest

from visual_dna.config.scoring import ScoringConfig
from visual_dna.genetics import from_seed
from visual_dna.scoring import (
    QualityScorer,
    QualityTier,
    UniquenessEvaluator,
    calculate_complexity,
    genome_signature,
    levenshtein,
    quality_tier,
    similarity,
)
from visual_dna.scoring.quality import motion_flow_score, visual_balance_score


class TestComplexity:
    def test_seed_42(self, genome_42):
        # 10*2 + 2*19 + 10 (glow) + 15 (gravity) + floor-part of 20*0.67956
        assert calculate_complexity(genome_42) == 96

    def test_non_finite_components_count_as_zero(self, genome_42):
        genome_42.chaos.chaos_level = math.nan
        assert calculate_complexity(genome_42) == 83

    def test_bare_genome(self, genome_42):
        genome_42.shape.complexity = 0
        genome_42.particle.count = 0
        genome_42.fx.has_glow = False
        genome_42.motion.has_gravity = False
        genome_42.chaos.chaos_level = 0.0
        assert calculate_complexity(genome_42) == 0


class TestQualityScorer:
    @pytest.mark.parametrize("seed", range(0, 3000, 97))
    def test_score_in_unit_interval(self, seed):
        score = QualityScorer().score(from_seed(seed))
        assert 0.0 <= score <= 1.0

    def test_non_finite_speed_never_yields_nan(self, genome_42):
        genome_42.motion.speed = math.nan
        report = QualityScorer().evaluate(genome_42)
        assert not math.isnan(report.total)
        assert 0.0 <= report.total <= 1.0

    def test_report_sub_scores_are_clamped(self, genome_42):
        report = QualityScorer().evaluate(genome_42, 500.0, uniqueness=3.0)
        assert report.complexity == 1.0
        assert report.uniqueness == 1.0
        for value in report.to_dict().values():
            assert 0.0 <= value <= 1.0

    def test_total_is_weighted_sum(self, genome_42):
        scorer = QualityScorer()
        report = scorer.evaluate(genome_42, 50.0, uniqueness=0.5)
        weights = scorer.config.weights
        expected = (
            report.complexity * weights.complexity
            + report.color_harmony * weights.color_harmony
            + report.motion_flow * weights.motion_flow
            + report.visual_balance * weights.visual_balance
            + report.uniqueness * weights.uniqueness
        )
        assert report.total == pytest.approx(expected)
        assert report.complexity == pytest.approx(0.5)

    def test_scoring_does_not_touch_genome(self, genome_42):
        before = genome_42.to_dict()
        QualityScorer().score(genome_42, history=["x"])
        assert genome_42.to_dict() == before

    def test_motion_flow_straight_trajectory(self, genome_42):
        # speed 100.4/200, straight 0.3, gravity + bounce 0.5
        expected = (100.4 / 200 + 0.3 + 0.5) / 3
        assert motion_flow_score(genome_42) == pytest.approx(expected)

    def test_visual_balance(self, genome_42):
        # complexity 2/10, symmetry 7/8 (capped at 1), glow only
        expected = (0.2 + 7 / 8 + 0.2 + (0.1 if genome_42.fx.has_blur else 0.0)) / 3
        assert visual_balance_score(genome_42) == pytest.approx(expected)


class TestTiers:
    @pytest.mark.parametrize(
        "score,tier",
        [
            (1.0, QualityTier.EXCELLENT),
            (0.8, QualityTier.EXCELLENT),
            (0.79, QualityTier.GOOD),
            (0.6, QualityTier.GOOD),
            (0.4, QualityTier.ACCEPTABLE),
            (0.2, QualityTier.POOR),
            (0.19, QualityTier.FAILED),
            (0.0, QualityTier.FAILED),
        ],
    )
    def test_boundaries(self, score, tier):
        assert quality_tier(score) is tier


class TestSimilarity:
    def test_levenshtein_classic(self):
        assert levenshtein("kitten", "sitting") == 3

    def test_levenshtein_edge_cases(self):
        assert levenshtein("", "abc") == 3
        assert levenshtein("abc", "abc") == 0

    def test_similarity_is_symmetric(self):
        a, b = "circle-25512050-S100-C67", "star-25512050-S90.50-C12"
        assert similarity(a, b) == similarity(b, a)

    def test_identical_and_empty(self):
        assert similarity("abc", "abc") == 1.0
        assert similarity("", "abc") == 0.0
        assert similarity("", "") == 0.0


class TestUniqueness:
    def test_empty_history(self, genome_42):
        value = UniquenessEvaluator().uniqueness(genome_42, [])
        assert value == pytest.approx(1.0 + 0.3 * genome_42.chaos.chaos_level)

    def test_identical_history_removes_base_novelty(self, genome_42):
        signature = genome_signature(genome_42)
        value = UniquenessEvaluator().uniqueness(genome_42, [signature, signature])
        assert value == pytest.approx(0.3 * genome_42.chaos.chaos_level)

    def test_half_similar_history(self, genome_42):
        history = [genome_signature(genome_42), "zzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzz"]
        value = UniquenessEvaluator().uniqueness(genome_42, history)
        assert value == pytest.approx(0.5 + 0.3 * genome_42.chaos.chaos_level)

    def test_custom_bonus(self, genome_42):
        evaluator = UniquenessEvaluator(ScoringConfig(chaos_uniqueness_bonus=0.0))
        assert evaluator.uniqueness(genome_42, []) == 1.0


def test_signature_format(genome_42):
    color = genome_42.color.primary
    assert genome_signature(genome_42) == f"circle-{color.r}{color.g}{color.b}-S100.40-C67"

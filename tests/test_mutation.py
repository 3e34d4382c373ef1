"""Tests for the mutation operator."""

import math
import random

import pytest

from tests.fakes.fake_rng import SequenceRng
from visual_dna.evolution import DEFAULT_MUTATION_CONFIG, mutate_genome, perturb_numeric
from visual_dna.genetics import (
    GENE_GROUPS,
    BooleanGene,
    EnumGene,
    NumericGene,
    NumericSemantic,
    from_seed,
)
from visual_dna.genetics.groups import ELEMENTS, SPELL_TYPES
from visual_dna.util.rng import MissingRNGError


def _genes(genome):
    return {name: group for name, group in genome.groups()}


class TestMutateGenome:
    def test_rate_zero_keeps_every_gene(self, genome_42, seeded_rng):
        child = mutate_genome(genome_42, 0.0, rng=seeded_rng)
        assert _genes(child) == _genes(genome_42)

    def test_input_is_not_modified(self, genome_42, seeded_rng):
        before = genome_42.to_dict()
        mutate_genome(genome_42, 1.0, rng=seeded_rng)
        assert genome_42.to_dict() == before

    def test_child_metadata(self, genome_42, seeded_rng):
        genome_42.quality_score = 0.8
        child = mutate_genome(genome_42, 0.3, rng=seeded_rng)
        assert child.generation == 1
        assert child.quality_score == 0.0
        assert child.entropy is None
        assert len(child.lineage) == 1
        assert child.lineage[0].kind == "mutation"
        assert child.lineage[0].rate == 0.3
        assert child.lineage[0].generation == 1

    def test_lineage_keeps_three_most_recent(self, genome_42, seeded_rng):
        genome = genome_42
        for _ in range(5):
            genome = mutate_genome(genome, 0.3, rng=seeded_rng)
        assert genome.generation == 5
        assert [entry.generation for entry in genome.lineage] == [3, 4, 5]

    def test_rate_is_clamped(self, genome_42, seeded_rng):
        child = mutate_genome(genome_42, 7.0, rng=seeded_rng)
        assert child.lineage[-1].rate == 1.0

    def test_requires_rng(self, genome_42):
        with pytest.raises(MissingRNGError):
            mutate_genome(genome_42, 0.5)

    def test_same_rng_stream_same_child(self, genome_42):
        a = mutate_genome(genome_42, 0.5, rng=random.Random(7))
        b = mutate_genome(genome_42, 0.5, rng=random.Random(7))
        assert _genes(a) == _genes(b)

    @pytest.mark.parametrize("seed", [1, 42, 777, 31337])
    def test_children_stay_valid(self, seed):
        rng = random.Random(seed)
        genome = from_seed(seed)
        for _ in range(10):
            genome = mutate_genome(genome, 1.0, rng=rng)
            result = genome.validate()
            assert result["ok"], result["issues"]
            assert not genome.has_effect_conflict

    def test_rate_one_boolean_bias(self):
        rng = random.Random(2024)
        genome = from_seed(42)
        trues = total = 0
        for _ in range(200):
            child = mutate_genome(genome, 1.0, rng=rng)
            for name, (_cls, specs) in GENE_GROUPS.items():
                group = getattr(child, name)
                for spec in specs:
                    # Invariant resolution can clear these two afterwards
                    if isinstance(spec, BooleanGene) and spec.name not in (
                        "has_distortion",
                        "has_quantum_effects",
                    ):
                        trues += getattr(group, spec.name)
                        total += 1
        assert trues / total == pytest.approx(0.7, abs=0.02)

    def test_rate_one_resamples_only_declared_enums(self):
        rng = random.Random(11)
        genome = from_seed(42)
        elements, spell_types = set(), set()
        for _ in range(300):
            child = mutate_genome(genome, 1.0, rng=rng)
            elements.add(child.elemental.primary_element)
            spell_types.add(child.complex.spell_type)
            for name, (_cls, specs) in GENE_GROUPS.items():
                for spec in specs:
                    if isinstance(spec, EnumGene) and not spec.resample:
                        before = getattr(getattr(genome, name), spec.name)
                        assert getattr(getattr(child, name), spec.name) == before, spec.name
        assert elements == set(ELEMENTS)
        assert spell_types == set(SPELL_TYPES)

    def test_rate_one_perturbs_unbounded_numerics(self):
        rng = random.Random(5)
        genome = from_seed(42)
        checked = 0
        for _ in range(50):
            child = mutate_genome(genome, 1.0, rng=rng)
            for name, (_cls, specs) in GENE_GROUPS.items():
                for spec in specs:
                    if (
                        isinstance(spec, NumericGene)
                        and not spec.integral
                        and spec.semantic in (NumericSemantic.SPEED, NumericSemantic.OTHER)
                    ):
                        before = getattr(getattr(genome, name), spec.name)
                        assert getattr(getattr(child, name), spec.name) != before, spec.name
                        checked += 1
        assert checked > 0

    def test_color_channels_stay_in_range(self, seeded_rng):
        genome = from_seed(3)
        for _ in range(20):
            genome = mutate_genome(genome, 1.0, rng=seeded_rng)
        for color in (genome.color.primary, genome.color.secondary, genome.elemental.primary_color):
            for channel in (color.r, color.g, color.b):
                assert isinstance(channel, int)
                assert 0 <= channel <= 255
            assert 0.0 <= color.a <= 1.0


class TestPerturbNumeric:
    def test_ratio_width(self):
        # variance = 0.3 + 0.5 * 0.4 = 0.5; offset (1.0 - 0.5) * 0.5 = 0.25
        rng = SequenceRng([0.5, 1.0])
        assert perturb_numeric(0.5, NumericSemantic.RATIO, rng) == pytest.approx(0.75)

    def test_ratio_is_clamped(self):
        rng = SequenceRng([0.99, 0.99])
        assert perturb_numeric(0.95, NumericSemantic.RATIO, rng) == 1.0

    def test_color_channel_is_clamped(self):
        rng = SequenceRng([0.99, 0.0])
        assert perturb_numeric(10, NumericSemantic.COLOR_CHANNEL, rng) == 0

    def test_size_floor(self):
        rng = SequenceRng([0.0])
        assert perturb_numeric(2.0, NumericSemantic.SIZE, rng) == DEFAULT_MUTATION_CONFIG.min_size

    def test_speed_variance_scales_with_magnitude(self):
        # variance = |100| * 1.0 + 15 = 115; offset 0.5 * 115
        rng = SequenceRng([1.0])
        assert perturb_numeric(100.0, NumericSemantic.SPEED, rng) == pytest.approx(157.5)

    def test_other_semantic(self):
        # variance = |10| * 0.6 + 25 = 31; offset -0.5 * 31
        rng = SequenceRng([0.0])
        assert perturb_numeric(10.0, NumericSemantic.OTHER, rng) == pytest.approx(-5.5)

    def test_non_finite_result_keeps_old_value(self):
        rng = SequenceRng([0.75])
        old = math.inf
        assert perturb_numeric(old, NumericSemantic.SPEED, rng) == old

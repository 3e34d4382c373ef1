"""Tests for genome dict serialization and tolerant decoding."""

import random

import pytest

from tests.fakes.fake_rng import SequenceRng
from visual_dna.evolution import crossover_genomes, mutate_genome
from visual_dna.genetics import (
    Genome,
    from_entropy,
    from_seed,
    genome_from_dict,
    genome_to_dict,
    neutral_genome,
)
from visual_dna.genetics.genome_codec import genome_debug_snapshot


def _decode(record, **kwargs):
    return genome_from_dict(record, genome_factory=neutral_genome, **kwargs)


class TestRoundTrip:
    def test_seeded_genome(self, genome_42):
        record = genome_to_dict(genome_42)
        result = _decode(record)
        assert result.ok
        assert genome_to_dict(result.genome) == record

    def test_entropy_genome_keeps_record(self, entropy_record):
        record = genome_to_dict(from_entropy(entropy_record))
        result = _decode(record)
        assert result.ok
        assert result.genome.entropy == entropy_record
        assert genome_to_dict(result.genome) == record

    def test_lineage_survives(self, genome_42):
        rng = random.Random(3)
        child = mutate_genome(genome_42, 0.4, rng=rng)
        child = crossover_genomes(child, from_seed(9), rng=rng)
        record = genome_to_dict(child)
        decoded = _decode(record).genome
        assert decoded.lineage == child.lineage
        assert decoded.generation == child.generation

    def test_record_has_every_group(self, genome_42):
        record = genome_42.to_dict()
        for name, _group in genome_42.groups():
            assert isinstance(record[name], dict)
        assert record["lineage"] == []
        assert record["entropy"] is None

    def test_elemental_colors_have_no_alpha(self, genome_42):
        record = genome_42.to_dict()
        assert set(record["elemental"]["primary_color"]) == {"r", "g", "b"}
        assert set(record["color"]["primary"]) == {"r", "g", "b", "a"}

    def test_unknown_keys_are_ignored(self, genome_42):
        record = genome_42.to_dict()
        record["future_field"] = {"x": 1}
        record["shape"]["wobble"] = 3
        result = _decode(record)
        assert result.ok


class TestPartialRecords:
    def test_single_field_record(self):
        result = _decode({"shape": {"core_shape": "star"}})
        genome = result.genome
        neutral = neutral_genome()
        assert genome.shape.core_shape == "star"
        assert genome.shape.core_size == neutral.shape.core_size
        assert genome.motion == neutral.motion
        assert "shape.core_size" in result.defaulted
        assert "motion" in result.defaulted
        assert "shape.core_shape" not in result.defaulted
        assert genome.validate()["ok"]

    def test_empty_record_is_neutral(self):
        result = _decode({})
        assert genome_to_dict(result.genome) == genome_to_dict(neutral_genome())
        assert not result.ok

    @pytest.mark.parametrize("record", [None, 42, "genome", ["shape"]])
    def test_non_dict_record(self, record):
        result = _decode(record)
        assert result.defaulted == ["<record>"]
        assert genome_to_dict(result.genome) == genome_to_dict(neutral_genome())

    def test_from_dict_classmethod(self):
        genome = Genome.from_dict({"motion": {"trajectory": "orbit"}})
        assert genome.motion.trajectory == "orbit"


class TestMalformedValues:
    def test_wrong_type_falls_back(self):
        result = _decode({"shape": {"core_shape": "star", "core_size": "big"}})
        assert result.genome.shape.core_size == neutral_genome().shape.core_size
        assert "shape.core_size" in result.defaulted

    def test_color_channel_out_of_range(self):
        raw = {"color": {"primary": {"r": 300, "g": 10, "b": 20, "a": 0.5}}}
        result = _decode(raw)
        primary = result.genome.color.primary
        assert primary.r == neutral_genome().color.primary.r
        assert (primary.g, primary.b, primary.a) == (10, 20, 0.5)
        assert "color.primary.r" in result.defaulted

    def test_unknown_enum_value(self):
        result = _decode({"shape": {"core_shape": "dodecahedron"}})
        assert result.genome.shape.core_shape == neutral_genome().shape.core_shape
        assert "shape.core_shape" in result.defaulted

    def test_non_finite_number(self):
        result = _decode({"motion": {"speed": float("nan")}})
        assert result.genome.motion.speed == neutral_genome().motion.speed
        assert "motion.speed" in result.defaulted

    def test_bool_is_not_a_number(self):
        result = _decode({"particle": {"count": True}})
        assert "particle.count" in result.defaulted

    def test_ratio_out_of_range(self):
        result = _decode({"chaos": {"chaos_level": 1.5}})
        assert result.genome.chaos.chaos_level == neutral_genome().chaos.chaos_level

    def test_bad_lineage_and_entropy(self, genome_42):
        record = genome_42.to_dict()
        record["lineage"] = [{"type": "teleport", "generation": 1, "timestamp": 0}]
        record["entropy"] = {"timestamp": "soon"}
        result = _decode(record)
        assert result.genome.lineage == []
        assert result.genome.entropy is None
        assert set(result.defaulted) == {"lineage", "entropy"}

    def test_quality_is_clamped(self, genome_42):
        record = genome_42.to_dict()
        record["quality_score"] = 4.2
        assert _decode(record).genome.quality_score == 1.0


class TestConflictResolution:
    def _conflicted_record(self, genome_42):
        record = genome_42.to_dict()
        record["fx"]["has_distortion"] = True
        record["chaos"]["has_quantum_effects"] = True
        return record

    def test_conflict_is_resolved(self, genome_42):
        genome = _decode(self._conflicted_record(genome_42)).genome
        assert not genome.has_effect_conflict

    def test_resolution_is_deterministic_without_rng(self, genome_42):
        record = self._conflicted_record(genome_42)
        assert genome_to_dict(_decode(record).genome) == genome_to_dict(_decode(record).genome)

    def test_caller_rng_decides(self, genome_42):
        record = self._conflicted_record(genome_42)
        genome = _decode(record, rng=SequenceRng([0.9])).genome
        assert genome.fx.has_distortion is False
        assert genome.chaos.has_quantum_effects is True


def test_debug_snapshot(genome_42):
    snapshot = genome_debug_snapshot(genome_42)
    assert snapshot["signature"] == genome_42.signature
    assert snapshot["element"] == "fire"
    assert snapshot["generation"] == 0

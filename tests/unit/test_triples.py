"""Tests fuer SemanticTriple und ExtractionResult (domain/triples.py)."""

import dataclasses

import pytest

from lit_radar.domain.triples import ExtractionResult, SemanticTriple, TextLevel


def _triple(subject: str, predicate: str, obj: str, **kwargs) -> SemanticTriple:
    return SemanticTriple(subject=subject, predicate=predicate, object=obj, **kwargs)


class TestSemanticTriple:
    """Gleichheit, Hash und Serialisierung."""

    def test_equality_ignores_span_level_confidence(self):
        a = _triple("TNT", "forms", "gas", source_text="a", confidence=0.5)
        b = _triple(
            "TNT", "forms", "gas",
            source_text="b", level=TextLevel.PARAGRAPH, confidence=0.9,
        )
        assert a == b
        assert hash(a) == hash(b)

    def test_different_roles_not_equal(self):
        assert _triple("TNT", "forms", "gas") != _triple("TNT", "forms", "smoke")

    def test_set_deduplicates(self):
        triples = {
            _triple("TNT", "forms", "gas", level=TextLevel.PARAGRAPH),
            _triple("TNT", "forms", "gas", level=TextLevel.SENTENCE),
        }
        assert len(triples) == 1

    def test_immutable(self):
        triple = _triple("TNT", "forms", "gas")
        with pytest.raises(dataclasses.FrozenInstanceError):
            triple.subject = "RDX"  # type: ignore[misc]

    def test_as_dict(self):
        data = _triple("TNT", "forms", "gas", confidence=0.83333).as_dict()
        assert data["subject"] == "TNT"
        assert data["level"] == "SENTENCE"
        assert data["confidence"] == pytest.approx(0.8333)

    def test_str(self):
        assert str(_triple("TNT", "forms", "gas")).startswith("(TNT, forms, gas)")


class TestExtractionResultFromTriples:
    """Tests fuer den Reducer ExtractionResult.from_triples."""

    def test_empty(self):
        result = ExtractionResult.from_triples([], paragraph_count=0, sentence_count=0)
        assert result.total_triples == 0
        assert dict(result.predicate_frequency) == {}
        assert result.triples == ()

    def test_partitions_by_level_in_order(self):
        p1 = _triple("TNT", "forms", "gas", level=TextLevel.PARAGRAPH)
        s1 = _triple("RDX", "forms", "HMX", level=TextLevel.SENTENCE)
        p2 = _triple("HMX", "forms", "PETN", level=TextLevel.PARAGRAPH)
        result = ExtractionResult.from_triples([p1, s1, p2], paragraph_count=1, sentence_count=2)
        assert result.paragraph_triples == (p1, p2)
        assert result.sentence_triples == (s1,)
        assert result.triples == (p1, p2, s1)
        assert result.total_triples == 3

    def test_frequencies_count_duplicates(self):
        triples = [
            _triple("TNT", "forms", "gas", level=TextLevel.PARAGRAPH),
            _triple("TNT", "forms", "gas", level=TextLevel.SENTENCE),
            _triple("RDX", "contains", "gas", level=TextLevel.SENTENCE),
        ]
        result = ExtractionResult.from_triples(triples, paragraph_count=1, sentence_count=1)
        assert result.predicate_frequency == {"forms": 2, "contains": 1}
        assert result.subject_frequency == {"TNT": 2, "RDX": 1}
        assert result.object_frequency == {"gas": 3}

    def test_counts_passed_through(self):
        result = ExtractionResult.from_triples([], paragraph_count=3, sentence_count=7)
        assert result.paragraph_count == 3
        assert result.sentence_count == 7

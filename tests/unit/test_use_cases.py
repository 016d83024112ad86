"""Tests fuer die Use Cases (use_cases/*.py)."""

import math
from datetime import datetime, timezone

import pytest

from lit_radar.domain.models import Document
from lit_radar.use_cases._helpers import (
    warn_empty_texts,
    warn_missing_word_counts,
    warn_undated_documents,
)
from lit_radar.use_cases.comparison import analyze_comparison
from lit_radar.use_cases.extraction import analyze_corpus_extraction, analyze_extraction
from lit_radar.use_cases.temporal import analyze_period_comparison, analyze_temporal


@pytest.fixture()
def documents() -> list[Document]:
    return [
        Document(
            document_id="hmx-1",
            title="Synthesis of HMX",
            abstract="RDX forms HMX. HMX forms PETN.",
            publication_date=datetime(2020, 5, 1),
            word_count=6,
            keyword_counts={"rdx": 1, "hmx": 2, "petn": 1},
            matched_terms=frozenset({"rdx", "hmx", "petn"}),
            relevance_score=6.0,
        ),
        Document(
            document_id="tnt-1",
            abstract="TNT detonates at high temperature.",
            publication_date=datetime(2021, 5, 1),
            word_count=5,
            keyword_counts={"tnt": 2, "hmx": 4},
            matched_terms=frozenset({"tnt", "hmx"}),
            relevance_score=2.0,
        ),
        Document(
            document_id="undated",
            keyword_counts={"tnt": 1},
            matched_terms=frozenset({"tnt"}),
        ),
    ]


# --- Helpers ---


class TestWarningHelpers:
    """Tests fuer die Datenqualitaets-Warnungen."""

    def test_undated(self, documents: list[Document]):
        warnings: list[str] = []
        assert warn_undated_documents(documents, warnings) == 1
        assert "1 von 3" in warnings[0]

    def test_empty_texts(self, documents: list[Document]):
        warnings: list[str] = []
        assert warn_empty_texts(documents, warnings) == 1
        assert len(warnings) == 1

    def test_missing_word_counts(self, documents: list[Document]):
        warnings: list[str] = []
        assert warn_missing_word_counts(documents, warnings) == 1

    def test_no_warning_when_clean(self, documents: list[Document]):
        warnings: list[str] = []
        assert warn_undated_documents(documents[:2], warnings) == 0
        assert warnings == []


# --- Extraktion ---


class TestAnalyzeExtraction:
    """Tests fuer analyze_extraction."""

    def test_single_text(self):
        panel, methods, warnings = analyze_extraction("TNT detonates at high temperature.")
        assert panel.total_triples == 2
        assert panel.relevant_triples == 2
        assert panel.relevance_ratio == pytest.approx(1.0)
        assert len(panel.top_triples) == 1
        assert panel.top_triples[0]["subject"] == "TNT"
        assert panel.predicate_frequency == {"detonates": 2}
        assert panel.analysis_text
        assert methods
        assert warnings == []

    def test_empty_text_warns(self):
        panel, methods, warnings = analyze_extraction("   ")
        assert panel.total_triples == 0
        assert panel.paragraph_count == 0
        assert methods == []
        assert len(warnings) == 1

    def test_frequency_sorted_descending(self):
        panel, _, _ = analyze_extraction("RDX forms HMX. HMX forms PETN. TNT detonates at high temperature.")
        assert list(panel.predicate_frequency)[0] == "forms"


class TestAnalyzeCorpusExtraction:
    """Tests fuer analyze_corpus_extraction."""

    def test_aggregates_documents(self, documents: list[Document]):
        panel, _, warnings = analyze_corpus_extraction(documents)
        # hmx-1: 4 Tripel, tnt-1: 2 Tripel
        assert panel.total_triples == 6
        assert panel.paragraph_count == 2
        assert panel.sentence_count == 3
        assert any("ohne Abstract/Volltext" in w for w in warnings)

    def test_empty_corpus(self):
        panel, methods, warnings = analyze_corpus_extraction([])
        assert panel.total_triples == 0
        assert methods == []
        assert warnings == []


# --- Vergleich ---


class TestAnalyzeComparison:
    """Tests fuer analyze_comparison."""

    def test_panel(self, documents: list[Document]):
        panel, methods, _ = analyze_comparison(documents)
        assert panel.documents_analyzed == 3
        assert [r["document_id"] for r in panel.results] == ["hmx-1", "tnt-1", "undated"]
        assert len(methods) >= 3

    def test_feature_importance_sorted(self, documents: list[Document]):
        panel, _, _ = analyze_comparison(documents)
        variances = [row["variance"] for row in panel.feature_importance]
        assert variances == sorted(variances, reverse=True)

    def test_discrepancy_rows(self, documents: list[Document]):
        panel, _, _ = analyze_comparison(documents)
        assert sum(row["count"] for row in panel.discrepancies) == 3
        assert all(row["description"].startswith("Rule: [") for row in panel.discrepancies)

    def test_single_document_warns(self, documents: list[Document]):
        _, _, warnings = analyze_comparison(documents[:1])
        assert any("Korrelation" in w for w in warnings)

    def test_ground_truth_method_listed(self, documents: list[Document]):
        labelled = [documents[0].model_copy(update={"ground_truth": "high_keyword_density"})]
        panel, methods, _ = analyze_comparison(labelled)
        assert panel.evaluated_documents == 1
        assert panel.statistical_recall == pytest.approx(1.0)
        assert any("Ground-Truth" in m for m in methods)

    def test_empty_batch(self):
        panel, methods, warnings = analyze_comparison([])
        assert panel.documents_analyzed == 0
        assert methods == []
        assert warnings == []


# --- Trends ---


class TestAnalyzeTemporal:
    """Tests fuer analyze_temporal."""

    def test_panel(self, documents: list[Document]):
        panel, methods, warnings = analyze_temporal(documents, "YEAR")
        assert panel.total_documents == 3
        assert panel.dated_documents == 2
        assert panel.granularity == "YEAR"
        assert "hmx" in panel.emerging_keywords
        assert any("Publikationsdatum" in w for w in warnings)
        assert methods

    def test_trend_rows(self, documents: list[Document]):
        panel, _, _ = analyze_temporal(documents, "YEAR")
        rows = {row["keyword"]: row for row in panel.keyword_trends}
        assert rows["hmx"]["counts_by_interval"] == {"2020": 2, "2021": 4}
        assert rows["hmx"]["total"] == 6
        assert rows["hmx"]["first_seen"] == "2020-05-01T00:00:00"

    def test_empty_corpus_keeps_granularity(self):
        panel, _, _ = analyze_temporal([], "month")
        assert panel.granularity == "MONTH"
        assert panel.total_documents == 0


class TestAnalyzePeriodComparison:
    """Tests fuer analyze_period_comparison."""

    def test_panel(self, documents: list[Document]):
        panel, methods, _ = analyze_period_comparison(
            documents,
            (datetime(2020, 1, 1), datetime(2020, 12, 31)),
            (datetime(2021, 1, 1), datetime(2021, 12, 31)),
        )
        assert panel.period1_documents == 1
        assert panel.period2_documents == 1
        assert panel.changes["hmx"] == pytest.approx(1.0)
        assert math.isinf(panel.changes["tnt"])
        assert panel.new_keywords == ["tnt"]
        assert sorted(panel.vanished_keywords) == ["petn", "rdx"]
        assert methods

    def test_inverted_period_warns(self, documents: list[Document]):
        _, _, warnings = analyze_period_comparison(
            documents,
            (datetime(2021, 1, 1), datetime(2020, 1, 1)),
            (datetime(2021, 1, 1), datetime(2021, 12, 31)),
        )
        assert any("Periode 1" in w for w in warnings)

    def test_bounds_with_and_without_offset(self, documents: list[Document]):
        panel, _, warnings = analyze_period_comparison(
            documents,
            (datetime(2020, 1, 1, tzinfo=timezone.utc), datetime(2020, 12, 31)),
            (datetime(2021, 1, 1), datetime(2021, 12, 31, tzinfo=timezone.utc)),
        )
        assert panel.period1_documents == 1
        assert panel.period2_documents == 1
        assert not any("Start liegt nach Ende" in w for w in warnings)

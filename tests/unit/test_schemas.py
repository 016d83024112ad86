"""Tests fuer Pydantic Request/Response Models (api/schemas.py, domain/models.py)."""

import json
import math
from datetime import datetime

import pytest
from pydantic import ValidationError

from lit_radar.api.schemas import (
    AnalysisRequest,
    AnalysisResponse,
    ComparisonPanel,
    DocumentBatchRequest,
    ExplainabilityMetadata,
    ExtractionPanel,
    ExtractionRequest,
    PeriodComparisonPanel,
    PeriodComparisonRequest,
    TemporalPanel,
    TemporalRequest,
)
from lit_radar.domain.models import ClassificationResult, Document


# --- Document ---


class TestDocument:
    """Tests fuer das Eingabe-Dokument."""

    def test_minimal(self):
        doc = Document(document_id="a")
        assert doc.word_count == 0
        assert doc.keyword_counts == {}
        assert doc.matched_terms == frozenset()
        assert doc.publication_date is None

    def test_empty_id_raises(self):
        with pytest.raises(ValidationError):
            Document(document_id="")

    def test_negative_word_count_raises(self):
        with pytest.raises(ValidationError):
            Document(document_id="a", word_count=-1)

    def test_negative_keyword_count_raises(self):
        with pytest.raises(ValidationError):
            Document(document_id="a", keyword_counts={"tnt": -2})

    def test_frozen(self):
        doc = Document(document_id="a")
        with pytest.raises(ValidationError):
            doc.word_count = 5  # type: ignore[misc]

    def test_missing_keyword_counts_as_zero(self):
        doc = Document(document_id="a", keyword_counts={"tnt": 3}, matched_terms=frozenset({"tnt", "rdx"}))
        assert doc.keyword_count("tnt") == 3
        assert doc.keyword_count("rdx") == 0

    def test_content_text(self):
        doc = Document(document_id="a", abstract="Abstract.", full_text="Body.")
        assert doc.content_text() == "Abstract.\n\nBody."

    def test_content_text_skips_blank_parts(self):
        assert Document(document_id="a", abstract="  ", full_text="Body.").content_text() == "Body."
        assert Document(document_id="a").content_text() == ""

    def test_parses_iso_date(self):
        doc = Document.model_validate({"document_id": "a", "publication_date": "2021-06-01T00:00:00"})
        assert doc.publication_date == datetime(2021, 6, 1)


class TestClassificationResult:
    """Tests fuer ClassificationResult-Properties."""

    def test_score_difference(self):
        result = ClassificationResult(document_id="a", rule_based_score=0.7, statistical_score=0.4)
        assert result.score_difference == pytest.approx(0.3)

    def test_agreement_on_intersection(self):
        result = ClassificationResult(
            document_id="a", rule_based_labels=("x", "y"), statistical_labels=("y",),
        )
        assert result.has_agreement is True

    def test_no_agreement_when_empty(self):
        assert ClassificationResult(document_id="a").has_agreement is False


# --- Requests ---


class TestRequests:
    """Tests fuer die Request-Models."""

    def test_extraction_default_text(self):
        assert ExtractionRequest().text == ""

    def test_batch_default_empty(self):
        assert DocumentBatchRequest().documents == []

    def test_batch_validates_documents(self):
        with pytest.raises(ValidationError):
            DocumentBatchRequest(documents=[{"document_id": ""}])

    def test_temporal_granularity_optional(self):
        assert TemporalRequest().granularity is None
        assert TemporalRequest(granularity="month").granularity == "month"

    def test_temporal_granularity_too_long(self):
        with pytest.raises(ValidationError):
            TemporalRequest(granularity="x" * 21)

    def test_analysis_request_inherits_fields(self):
        req = AnalysisRequest(documents=[{"document_id": "a"}], granularity="YEAR")
        assert req.documents[0].document_id == "a"

    def test_period_request_requires_dates(self):
        with pytest.raises(ValidationError):
            PeriodComparisonRequest(documents=[])


# --- Panel Defaults ---


class TestPanelDefaults:
    """Tests fuer Standard-Werte der Panel-Models."""

    def test_extraction_defaults(self):
        p = ExtractionPanel()
        assert p.total_triples == 0
        assert p.top_triples == []
        assert p.analysis_text == ""

    def test_comparison_defaults(self):
        p = ComparisonPanel()
        assert p.documents_analyzed == 0
        assert p.agreement_rate == 0.0
        assert p.discrepancies == []

    def test_temporal_defaults(self):
        p = TemporalPanel()
        assert p.granularity == "YEAR"
        assert p.keyword_trends == []

    def test_explainability_defaults(self):
        e = ExplainabilityMetadata()
        assert e.methods == []
        assert e.deterministic is True
        assert e.warnings == []
        assert e.query_time_ms == 0


class TestPeriodComparisonPanel:
    """JSON-Serialisierung unendlicher Veraenderungen."""

    def test_infinity_serialized_as_string(self):
        panel = PeriodComparisonPanel(changes={"petn": math.inf, "tnt": 0.5})
        data = json.loads(panel.model_dump_json())
        assert data["changes"] == {"petn": "Infinity", "tnt": 0.5}

    def test_python_dump_keeps_float(self):
        panel = PeriodComparisonPanel(changes={"petn": math.inf})
        assert math.isinf(panel.model_dump()["changes"]["petn"])


# --- AnalysisResponse ---


class TestAnalysisResponse:
    """Tests fuer die Gesamt-Antwort."""

    def test_minimal_response(self):
        r = AnalysisResponse()
        assert r.documents_analyzed == 0
        assert r.extraction.total_triples == 0
        assert r.explainability.deterministic is True

    def test_serialization_roundtrip(self):
        r = AnalysisResponse(documents_analyzed=3, comparison=ComparisonPanel(documents_analyzed=3))
        restored = AnalysisResponse.model_validate_json(r.model_dump_json())
        assert restored.comparison.documents_analyzed == 3

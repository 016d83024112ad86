"""Klassifikationsvergleich: Regelbasiert (Tripel) vs. statistisch (Keywords)."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from lit_radar.domain.analysis_text import generate_comparison_text
from lit_radar.domain.comparison import compare
from lit_radar.domain.extraction import TripleExtractor
from lit_radar.domain.models import ComparisonAnalysis, ComparisonPanel, Document
from lit_radar.use_cases._helpers import warn_empty_texts, warn_missing_word_counts

logger = logging.getLogger(__name__)


def _result_rows(analysis: ComparisonAnalysis) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for result in analysis.results:
        rows.append({
            "document_id": result.document_id,
            "rule_based_score": round(result.rule_based_score, 4),
            "statistical_score": round(result.statistical_score, 4),
            "score_difference": round(result.score_difference, 4),
            "rule_based_labels": list(result.rule_based_labels),
            "statistical_labels": list(result.statistical_labels),
            "agreement": result.has_agreement,
            "ground_truth": result.ground_truth,
            "rule_based_features": {k: round(v, 4) for k, v in result.rule_based_features.items()},
            "statistical_features": {k: round(v, 4) for k, v in result.statistical_features.items()},
        })
    return rows


def build_comparison_panel(analysis: ComparisonAnalysis) -> ComparisonPanel:
    # Varianz absteigend, bei Gleichstand alphabetisch
    importance = sorted(
        analysis.feature_importance.items(),
        key=lambda item: (-item[1], item[0]),
    )
    discrepancies = sorted(
        analysis.discrepancies.items(),
        key=lambda item: (-item[1], item[0]),
    )

    panel = ComparisonPanel(
        documents_analyzed=len(analysis.results),
        score_correlation=round(analysis.score_correlation, 4),
        agreement_rate=round(analysis.agreement_rate, 4),
        feature_importance=[
            {"feature": name, "variance": round(variance, 6)} for name, variance in importance
        ],
        discrepancies=[
            {"description": description, "count": count} for description, count in discrepancies
        ],
        results=_result_rows(analysis),
        evaluated_documents=analysis.evaluated_documents,
        rule_based_precision=round(analysis.rule_based_precision, 4),
        rule_based_recall=round(analysis.rule_based_recall, 4),
        statistical_precision=round(analysis.statistical_precision, 4),
        statistical_recall=round(analysis.statistical_recall, 4),
    )
    panel.analysis_text = generate_comparison_text(panel)
    return panel


def analyze_comparison(
    documents: Sequence[Document],
    *,
    extractor: TripleExtractor | None = None,
) -> tuple[ComparisonPanel, list[str], list[str]]:
    """
    Beide Klassifikationsverfahren auf einen Dokument-Batch anwenden.

    Regelbasiert: Tripel-Dichte, Relevanzanteil, Konfidenz, Praedikat-Diversitaet,
    Entitaets-Kohaerenz. Statistisch: Keyword-Frequenz, -Diversitaet,
    -Dominanz, Shannon-Entropie, laengennormierter Score, Titel-Treffer.
    """
    methods: list[str] = []
    warnings: list[str] = []

    if not documents:
        return ComparisonPanel(), methods, warnings

    warn_empty_texts(documents, warnings)
    warn_missing_word_counts(documents, warnings)

    analysis = compare(documents, extractor)
    logger.info(
        "Vergleich: %d Dokumente, Uebereinstimmung %.3f, r = %.3f",
        len(analysis.results), analysis.agreement_rate, analysis.score_correlation,
    )

    methods.append("Regelbasierte Klassifikation (5 Tripel-Merkmale, feste Gewichte)")
    methods.append("Statistische Klassifikation (6 Keyword-Merkmale, Shannon-Entropie)")
    methods.append("Pearson-Korrelation der Scores, Populationsvarianz je Merkmal")
    if analysis.evaluated_documents > 0:
        methods.append(
            f"Precision/Recall gegen {analysis.evaluated_documents} Ground-Truth-Labels"
        )
    if len(analysis.results) < 2:
        warnings.append("Weniger als 2 Dokumente, Korrelation nicht berechenbar")

    return build_comparison_panel(analysis), methods, warnings

"""Batch-Vergleich regelbasierter und statistischer Klassifikation.

Die Aggregation (Korrelation, Uebereinstimmung, Varianzen, Diskrepanzen)
benoetigt den vollstaendig materialisierten Batch. Die Klassifikation der
einzelnen Dokumente ist voneinander unabhaengig.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from lit_radar.domain.classification import classify_document
from lit_radar.domain.extraction import TripleExtractor
from lit_radar.domain.metrics import pearson_correlation, population_variance
from lit_radar.domain.models import ClassificationResult, ComparisonAnalysis, Document


def compare(
    documents: Sequence[Document],
    extractor: TripleExtractor | None = None,
) -> ComparisonAnalysis:
    """Alle Dokumente klassifizieren und beide Verfahren vergleichen."""
    if extractor is None:
        extractor = TripleExtractor()
    results = [classify_document(doc, extractor) for doc in documents]
    return aggregate_results(results)


def aggregate_results(results: Sequence[ClassificationResult]) -> ComparisonAnalysis:
    """ComparisonAnalysis aus fertigen Einzelergebnissen berechnen (Reihenfolge bleibt)."""
    rule_precision, rule_recall, evaluated = _ground_truth_metrics(results, rule_based=True)
    stat_precision, stat_recall, _ = _ground_truth_metrics(results, rule_based=False)

    return ComparisonAnalysis(
        results=tuple(results),
        score_correlation=score_correlation(results),
        agreement_rate=agreement_rate(results),
        feature_importance=feature_importance(results),
        discrepancies=classification_discrepancies(results),
        evaluated_documents=evaluated,
        rule_based_precision=rule_precision,
        rule_based_recall=rule_recall,
        statistical_precision=stat_precision,
        statistical_recall=stat_recall,
    )


def score_correlation(results: Sequence[ClassificationResult]) -> float:
    """Pearson-Korrelation der beiden Score-Reihen (0.0 bei < 2 Dokumenten)."""
    if len(results) < 2:
        return 0.0
    return pearson_correlation(
        [r.rule_based_score for r in results],
        [r.statistical_score for r in results],
    )


def agreement_rate(results: Sequence[ClassificationResult]) -> float:
    """Anteil der Dokumente mit nicht-leerer Label-Schnittmenge."""
    if not results:
        return 0.0
    agreeing = sum(1 for r in results if r.has_agreement)
    return agreeing / len(results)


def discrepancy_key(result: ClassificationResult) -> str:
    rule = ", ".join(result.rule_based_labels)
    stat = ", ".join(result.statistical_labels)
    return f"Rule: [{rule}] vs Stat: [{stat}]"


def classification_discrepancies(results: Sequence[ClassificationResult]) -> dict[str, int]:
    """Haeufigkeit der Label-Kombinationen nicht uebereinstimmender Dokumente."""
    counter: Counter[str] = Counter()
    for result in results:
        if not result.has_agreement:
            counter[discrepancy_key(result)] += 1
    return dict(counter)


def feature_importance(results: Sequence[ClassificationResult]) -> dict[str, float]:
    """Populationsvarianz je Merkmal ueber alle Dokumente, die es liefern.

    Regelbasierte und statistische Merkmale teilen einen Namensraum; existiert
    ein Name in beiden, zaehlt pro Dokument der regelbasierte Wert.
    """
    names: set[str] = set()
    for result in results:
        names.update(result.rule_based_features)
        names.update(result.statistical_features)

    importance: dict[str, float] = {}
    for name in sorted(names):
        values: list[float] = []
        for result in results:
            value = result.rule_based_features.get(name)
            if value is None:
                value = result.statistical_features.get(name)
            if value is not None:
                values.append(value)
        importance[name] = population_variance(values)
    return importance


def _ground_truth_metrics(
    results: Sequence[ClassificationResult],
    *,
    rule_based: bool,
) -> tuple[float, float, int]:
    """Precision/Recall gegen das Ground-Truth-Label.

    Ein Verfahren "sagt vorher", wenn es mindestens ein Label vergibt, und
    "trifft", wenn das Ground-Truth-Label unter seinen Labels ist.

    Returns:
        (precision, recall, evaluated_documents)
    """
    evaluated = [r for r in results if r.ground_truth]
    if not evaluated:
        return 0.0, 0.0, 0

    predicted = 0
    hits = 0
    for result in evaluated:
        labels = result.rule_based_labels if rule_based else result.statistical_labels
        if labels:
            predicted += 1
        if result.ground_truth in labels:
            hits += 1

    precision = hits / predicted if predicted > 0 else 0.0
    recall = hits / len(evaluated)
    return precision, recall, len(evaluated)

"""Regelbasierte und statistische Klassifikation eines einzelnen Dokuments.

Zwei unabhaengige Merkmalsvektoren pro Dokument:
- Regelbasiert: aus den extrahierten semantischen Tripeln
- Statistisch: aus den Keyword-Zaehlern des Ingesters

Beide werden mit festen Gewichten zu einem Score verdichtet und ueber
Schwellwertregeln in Labels uebersetzt. Die Gewichte sind nicht trainiert.
"""

from __future__ import annotations

import math
from collections.abc import Mapping

from lit_radar.domain.extraction import TripleExtractor
from lit_radar.domain.metrics import ratio, shannon_entropy
from lit_radar.domain.models import ClassificationResult, Document
from lit_radar.domain.triples import ExtractionResult

# ---------------------------------------------------------------------------
# Merkmalsnamen
# ---------------------------------------------------------------------------

TRIPLE_DENSITY = "triple_density"
EXPLOSIVE_TRIPLE_RATIO = "explosive_triple_ratio"
AVG_TRIPLE_CONFIDENCE = "avg_triple_confidence"
PREDICATE_DIVERSITY = "predicate_diversity"
ENTITY_COHERENCE = "entity_coherence"

KEYWORD_FREQUENCY = "keyword_frequency"
UNIQUE_KEYWORD_RATIO = "unique_keyword_ratio"
TOP_KEYWORD_DOMINANCE = "top_keyword_dominance"
KEYWORD_ENTROPY = "keyword_entropy"
LENGTH_NORMALIZED_SCORE = "length_normalized_score"
TITLE_KEYWORD_PRESENCE = "title_keyword_presence"

# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------

HIGH_EXPLOSIVE_SEMANTIC_CONTENT = "high_explosive_semantic_content"
HIGH_CONFIDENCE_RELATIONSHIPS = "high_confidence_relationships"
COHERENT_EXPLOSIVE_NARRATIVE = "coherent_explosive_narrative"
DIVERSE_EXPLOSIVE_PROCESSES = "diverse_explosive_processes"

HIGH_KEYWORD_DENSITY = "high_keyword_density"
DIVERSE_EXPLOSIVE_TERMINOLOGY = "diverse_explosive_terminology"
TITLE_INDICATES_EXPLOSIVE_CONTENT = "title_indicates_explosive_content"
HIGH_STATISTICAL_EXPLOSIVE_SCORE = "high_statistical_explosive_score"


# ---------------------------------------------------------------------------
# Regelbasierter Pfad
# ---------------------------------------------------------------------------


def rule_based_features(
    extraction: ExtractionResult,
    word_count: int,
    extractor: TripleExtractor,
) -> dict[str, float]:
    """Fuenf Merkmale aus der Tripel-Statistik eines Dokuments.

    entity_coherence normiert mit |Subjekte| + |Objekte| (nicht mit der
    Vereinigungsmenge); Entitaeten in beiden Rollen zaehlen damit doppelt
    im Nenner.
    """
    triples = extraction.triples
    total = len(triples)
    relevant = extractor.filter_relevant(triples)

    subjects = {t.subject for t in triples}
    objects = {t.object for t in triples}
    predicates = {t.predicate for t in triples}

    return {
        TRIPLE_DENSITY: ratio(total, word_count),
        EXPLOSIVE_TRIPLE_RATIO: len(relevant) / total if total > 0 else 0.0,
        AVG_TRIPLE_CONFIDENCE: (
            sum(t.confidence for t in triples) / total if total > 0 else 0.0
        ),
        PREDICATE_DIVERSITY: float(len(predicates)),
        ENTITY_COHERENCE: ratio(len(subjects & objects), len(subjects) + len(objects)),
    }


def rule_based_score(features: Mapping[str, float]) -> float:
    """Gewichtete Kombination der regelbasierten Merkmale."""
    score = 0.0
    score += features.get(EXPLOSIVE_TRIPLE_RATIO, 0.0) * 0.30
    score += features.get(AVG_TRIPLE_CONFIDENCE, 0.0) * 0.25
    score += min(1.0, features.get(TRIPLE_DENSITY, 0.0) * 100) * 0.20
    score += min(1.0, features.get(PREDICATE_DIVERSITY, 0.0) / 10) * 0.15
    score += features.get(ENTITY_COHERENCE, 0.0) * 0.10
    return score


def rule_based_labels(features: Mapping[str, float]) -> tuple[str, ...]:
    """Schwellwertregeln fuer die regelbasierten Labels (unabhaengig voneinander)."""
    labels: list[str] = []
    if features.get(EXPLOSIVE_TRIPLE_RATIO, 0.0) > 0.3:
        labels.append(HIGH_EXPLOSIVE_SEMANTIC_CONTENT)
    if features.get(AVG_TRIPLE_CONFIDENCE, 0.0) > 0.7:
        labels.append(HIGH_CONFIDENCE_RELATIONSHIPS)
    if features.get(ENTITY_COHERENCE, 0.0) > 0.2:
        labels.append(COHERENT_EXPLOSIVE_NARRATIVE)
    if features.get(PREDICATE_DIVERSITY, 0.0) > 5:
        labels.append(DIVERSE_EXPLOSIVE_PROCESSES)
    return tuple(labels)


# ---------------------------------------------------------------------------
# Statistischer Pfad
# ---------------------------------------------------------------------------


def title_contains_keywords(document: Document) -> bool:
    """True wenn der Titel (case-insensitiv) einen gematchten Begriff enthaelt."""
    if not document.title or not document.matched_terms:
        return False
    title = document.title.lower()
    return any(term.lower() in title for term in document.matched_terms if term)


def statistical_features(document: Document) -> dict[str, float]:
    """Sechs Merkmale aus den Keyword-Zaehlern und Metadaten eines Dokuments."""
    counts = list(document.keyword_counts.values())
    total = sum(counts)

    return {
        KEYWORD_FREQUENCY: ratio(total, document.word_count),
        UNIQUE_KEYWORD_RATIO: ratio(len(counts), total),
        TOP_KEYWORD_DOMINANCE: ratio(max(counts, default=0), total),
        KEYWORD_ENTROPY: shannon_entropy(counts),
        LENGTH_NORMALIZED_SCORE: (
            document.relevance_score / math.log(max(10, document.word_count))
        ),
        TITLE_KEYWORD_PRESENCE: 1.0 if title_contains_keywords(document) else 0.0,
    }


def statistical_score(features: Mapping[str, float]) -> float:
    """Gewichtete Kombination der statistischen Merkmale."""
    score = 0.0
    score += min(1.0, features.get(KEYWORD_FREQUENCY, 0.0) * 50) * 0.30
    score += features.get(UNIQUE_KEYWORD_RATIO, 0.0) * 0.20
    score += (1.0 - features.get(TOP_KEYWORD_DOMINANCE, 0.0)) * 0.15
    score += min(1.0, features.get(KEYWORD_ENTROPY, 0.0) / 3) * 0.15
    score += min(1.0, features.get(LENGTH_NORMALIZED_SCORE, 0.0) / 10) * 0.15
    score += features.get(TITLE_KEYWORD_PRESENCE, 0.0) * 0.05
    return score


def statistical_labels(
    features: Mapping[str, float],
    relevance_score: float,
) -> tuple[str, ...]:
    """Schwellwertregeln fuer die statistischen Labels."""
    labels: list[str] = []
    if features.get(KEYWORD_FREQUENCY, 0.0) > 0.02:
        labels.append(HIGH_KEYWORD_DENSITY)
    if features.get(UNIQUE_KEYWORD_RATIO, 0.0) > 0.5:
        labels.append(DIVERSE_EXPLOSIVE_TERMINOLOGY)
    if features.get(TITLE_KEYWORD_PRESENCE, 0.0) > 0.5:
        labels.append(TITLE_INDICATES_EXPLOSIVE_CONTENT)
    if relevance_score > 5.0:
        labels.append(HIGH_STATISTICAL_EXPLOSIVE_SCORE)
    return tuple(labels)


# ---------------------------------------------------------------------------
# Dokument-Klassifikation
# ---------------------------------------------------------------------------


def classify_document(
    document: Document,
    extractor: TripleExtractor,
) -> ClassificationResult:
    """Beide Verfahren auf ein Dokument anwenden (keine Abhaengigkeit zu anderen)."""
    extraction = extractor.extract_triples(document.content_text())
    rule_features = rule_based_features(extraction, document.word_count, extractor)
    stat_features = statistical_features(document)

    return ClassificationResult(
        document_id=document.document_id,
        rule_based_score=rule_based_score(rule_features),
        statistical_score=statistical_score(stat_features),
        rule_based_features=rule_features,
        statistical_features=stat_features,
        rule_based_labels=rule_based_labels(rule_features),
        statistical_labels=statistical_labels(stat_features, document.relevance_score),
        ground_truth=document.ground_truth,
    )

"""Regelbasierte Extraktion semantischer Tripel aus Fliesstext.

Verfahren:
1. Text an Leerzeilen in Absaetze teilen, jeden Absatz naiv in Saetze
   (Satzzeichen + Whitespace, keine Abkuerzungsbehandlung).
2. Jeder Absatz und jeder Satz ist ein eigener Abschnitt (Span).
3. Alle Muster laufen unabhaengig ueber jeden Span (nicht-ueberlappend,
   links nach rechts, case-insensitiv).
4. Kandidaten mit zu kurzen oder identischen Rollen werden verworfen,
   akzeptierte Tripel erhalten eine heuristische Konfidenz.

Keine echte Sprachanalyse (kein POS-Tagging, kein Dependency-Parsing);
die Extraktion ist best-effort ohne Recall-Garantie.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from lit_radar.domain.lexicons import DEFAULT_LEXICON, DomainLexicon
from lit_radar.domain.relevance import filter_relevant
from lit_radar.domain.triples import ExtractionResult, SemanticTriple, TextLevel

logger = logging.getLogger(__name__)

MEASURED_AT = "measured_at"
"""Synthetisches Praedikat des Messwert-Musters."""

MIN_ROLE_LENGTH = 3

BASE_CONFIDENCE = 0.5
ENTITY_BOOST = 0.3
ACTION_VERB_BOOST = 0.2
PROPERTY_BOOST = 0.2

_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")
_SENTENCE_SPLIT = re.compile(r"(?<=[.!?])\s+")

# Rollen umfassen 1-3 Woerter (greedy, mit Backtracking)
_ROLE = r"\w+(?:\s+\w+){0,2}"
_UNITS = r"(?:°C|°F|K|atm|bar|Pa|psi)\b"


class PatternKind(str, Enum):
    """Variante eines Extraktionsmusters."""

    RELATION = "relation"
    MEASUREMENT = "measurement"


@dataclass(frozen=True, slots=True)
class ExtractionPattern:
    """Regex plus Zuordnung Capture-Gruppe -> Rolle.

    Bei ``PatternKind.MEASUREMENT`` wird kein Praedikat aus dem Text
    gelesen, sondern immer ``measured_at`` gesetzt.
    """

    name: str
    regex: re.Pattern[str]
    subject_group: int
    object_group: int
    predicate_group: int | None = None
    kind: PatternKind = PatternKind.RELATION

    def roles(self, match: re.Match[str]) -> tuple[str | None, str | None, str | None]:
        """(subject, predicate, object) aus einem Match lesen."""
        subject = match.group(self.subject_group)
        obj = match.group(self.object_group)
        if self.kind is PatternKind.MEASUREMENT:
            return subject, MEASURED_AT, obj
        if self.predicate_group is None:
            return subject, None, obj
        return subject, match.group(self.predicate_group), obj


def _pattern(
    name: str,
    regex: str,
    subject_group: int,
    predicate_group: int | None,
    object_group: int,
    kind: PatternKind = PatternKind.RELATION,
) -> ExtractionPattern:
    return ExtractionPattern(
        name=name,
        regex=re.compile(regex, re.IGNORECASE),
        subject_group=subject_group,
        predicate_group=predicate_group,
        object_group=object_group,
        kind=kind,
    )


DEFAULT_PATTERNS: tuple[ExtractionPattern, ...] = (
    _pattern(
        "subject_verb_object",
        rf"(\b{_ROLE})\s+(increases?|decreases?|causes?|produces?|exhibits?|shows?|demonstrates?)"
        rf"\s+({_ROLE})",
        1, 2, 3,
    ),
    _pattern(
        "subject_has_object",
        rf"(\b{_ROLE})\s+(has|contains?|includes?)\s+({_ROLE})",
        1, 2, 3,
    ),
    _pattern(
        "subject_is_object",
        rf"(\b{_ROLE})\s+(is|was|were|are)\s+({_ROLE})",
        1, 2, 3,
    ),
    # Passiv: Oberflaechenreihenfolge ist Objekt ... Subjekt
    _pattern(
        "object_formed_by_subject",
        rf"(\b{_ROLE})\s+(?:is|was|were)\s+(formed|created|produced|synthesized)\s+by\s+({_ROLE})",
        3, 2, 1,
    ),
    _pattern(
        "property_at_value",
        rf"(\b{_ROLE})\s+at\s+(\d+(?:\.\d+)?\s*{_UNITS})",
        1, None, 2,
        kind=PatternKind.MEASUREMENT,
    ),
    _pattern(
        "chemical_reaction",
        rf"(\b{_ROLE})\s+(reacts?\s+with|combines?\s+with|forms?)\s+({_ROLE})",
        1, 2, 3,
    ),
    _pattern(
        "energetic_event",
        rf"(\b{_ROLE})\s+(detonates?|explodes?|burns?|ignites?|decomposes?)"
        rf"\s+(?:(?:at|under|upon|in|on|with)\s+)?({_ROLE})",
        1, 2, 3,
    ),
)


def split_paragraphs(text: str) -> list[str]:
    """Nicht-leere Absaetze (Trennung an Leerzeilen)."""
    return [p.strip() for p in _PARAGRAPH_SPLIT.split(text) if p.strip()]


def split_sentences(paragraph: str) -> list[str]:
    """Nicht-leere Saetze eines Absatzes (naive Satzgrenzen)."""
    return [s.strip() for s in _SENTENCE_SPLIT.split(paragraph) if s.strip()]


def collapse_whitespace(role: str) -> str:
    """Zeilenumbrueche und Mehrfach-Leerraum innerhalb einer Rolle zu einem Leerzeichen."""
    return " ".join(role.split())


def is_valid_triple(subject: str | None, predicate: str | None, obj: str | None) -> bool:
    """Kandidat pruefen: alle Rollen vorhanden, >2 Zeichen, paarweise verschieden."""
    if subject is None or predicate is None or obj is None:
        return False
    roles = (subject.strip(), predicate.strip(), obj.strip())
    if any(len(role) < MIN_ROLE_LENGTH for role in roles):
        return False
    return len(set(roles)) == 3


class TripleExtractor:
    """Wendet die Musterliste auf Absatz- und Satz-Spans eines Textes an."""

    def __init__(
        self,
        lexicon: DomainLexicon = DEFAULT_LEXICON,
        patterns: Sequence[ExtractionPattern] = DEFAULT_PATTERNS,
    ) -> None:
        self._lexicon = lexicon
        self._patterns = tuple(patterns)

    @property
    def lexicon(self) -> DomainLexicon:
        return self._lexicon

    @property
    def patterns(self) -> tuple[ExtractionPattern, ...]:
        return self._patterns

    def extract_triples(self, text: str | None) -> ExtractionResult:
        """Tripel aus einem Dokumenttext extrahieren.

        Leerer Text ergibt ein Ergebnis ohne Tripel, Absaetze und Saetze.
        """
        triples: list[SemanticTriple] = []
        paragraph_count = 0
        sentence_count = 0

        for paragraph in split_paragraphs(text or ""):
            paragraph_count += 1
            triples.extend(self.extract_from_span(paragraph, TextLevel.PARAGRAPH))

            for sentence in split_sentences(paragraph):
                sentence_count += 1
                triples.extend(self.extract_from_span(sentence, TextLevel.SENTENCE))

        return ExtractionResult.from_triples(
            triples,
            paragraph_count=paragraph_count,
            sentence_count=sentence_count,
        )

    def extract_from_span(self, span: str, level: TextLevel) -> list[SemanticTriple]:
        """Alle Muster auf einen einzelnen Span anwenden."""
        triples: list[SemanticTriple] = []
        for pattern in self._patterns:
            for match in pattern.regex.finditer(span):
                try:
                    subject, predicate, obj = pattern.roles(match)
                except IndexError:
                    logger.debug("Malformed match fuer Muster %s verworfen", pattern.name)
                    continue

                if subject is None or predicate is None or obj is None:
                    logger.debug("Unvollstaendiger Match fuer Muster %s verworfen", pattern.name)
                    continue
                subject, predicate, obj = (
                    collapse_whitespace(subject),
                    collapse_whitespace(predicate),
                    collapse_whitespace(obj),
                )
                if not is_valid_triple(subject, predicate, obj):
                    continue

                triples.append(SemanticTriple(
                    subject=subject,
                    predicate=predicate,
                    object=obj,
                    source_text=span,
                    level=level,
                    confidence=self.score_confidence(subject, predicate, obj),
                ))
        return triples

    def score_confidence(self, subject: str, predicate: str, obj: str) -> float:
        """Heuristische Konfidenz: Basis 0.5 plus Lexikon-Boni, max. 1.0."""
        confidence = BASE_CONFIDENCE
        if self._lexicon.mentions_entity(subject) or self._lexicon.mentions_entity(obj):
            confidence += ENTITY_BOOST
        if self._lexicon.is_action_verb(predicate):
            confidence += ACTION_VERB_BOOST
        if self._lexicon.mentions_property(obj):
            confidence += PROPERTY_BOOST
        return min(1.0, confidence)

    def filter_relevant(self, triples: Iterable[SemanticTriple]) -> list[SemanticTriple]:
        """Domain-relevante Tripel mit dem Lexikon dieses Extraktors filtern."""
        return filter_relevant(triples, self._lexicon)

"""Semantische Tripel und das unveraenderliche Extraktionsergebnis."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class TextLevel(str, Enum):
    """Textebene, auf der ein Tripel gefunden wurde."""

    PARAGRAPH = "PARAGRAPH"
    SENTENCE = "SENTENCE"


@dataclass(frozen=True, slots=True)
class SemanticTriple:
    """(Subjekt, Praedikat, Objekt)-Aussage aus einem Textabschnitt.

    Gleichheit und Hash beruhen nur auf den drei Rollen; Quelltext,
    Ebene und Konfidenz werden nicht verglichen.
    """

    subject: str
    predicate: str
    object: str
    source_text: str = field(default="", compare=False)
    level: TextLevel = field(default=TextLevel.SENTENCE, compare=False)
    confidence: float = field(default=0.5, compare=False)

    def as_dict(self) -> dict[str, str | float]:
        return {
            "subject": self.subject,
            "predicate": self.predicate,
            "object": self.object,
            "level": self.level.value,
            "confidence": round(self.confidence, 4),
            "source_text": self.source_text,
        }

    def __str__(self) -> str:
        return (
            f"({self.subject}, {self.predicate}, {self.object}) "
            f"[{self.level.value}, conf={self.confidence:.2f}]"
        )


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Ergebnis eines Extraktionslaufs ueber einen Dokumenttext.

    Attributes:
        paragraph_triples: Tripel auf Absatzebene (Fundreihenfolge).
        sentence_triples: Tripel auf Satzebene (Fundreihenfolge).
        predicate_frequency: Praedikat -> Anzahl.
        subject_frequency: Subjekt -> Anzahl.
        object_frequency: Objekt -> Anzahl.
        paragraph_count: Anzahl nicht-leerer Absaetze.
        sentence_count: Anzahl nicht-leerer Saetze.
    """

    paragraph_triples: tuple[SemanticTriple, ...] = ()
    sentence_triples: tuple[SemanticTriple, ...] = ()
    predicate_frequency: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    subject_frequency: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    object_frequency: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    paragraph_count: int = 0
    sentence_count: int = 0

    @classmethod
    def from_triples(
        cls,
        triples: Iterable[SemanticTriple],
        *,
        paragraph_count: int,
        sentence_count: int,
    ) -> ExtractionResult:
        """Tripel-Folge zu einem Ergebnis falten (reiner Reducer)."""
        paragraph: list[SemanticTriple] = []
        sentence: list[SemanticTriple] = []
        predicates: Counter[str] = Counter()
        subjects: Counter[str] = Counter()
        objects: Counter[str] = Counter()

        for triple in triples:
            if triple.level is TextLevel.PARAGRAPH:
                paragraph.append(triple)
            else:
                sentence.append(triple)
            predicates[triple.predicate] += 1
            subjects[triple.subject] += 1
            objects[triple.object] += 1

        return cls(
            paragraph_triples=tuple(paragraph),
            sentence_triples=tuple(sentence),
            predicate_frequency=MappingProxyType(dict(predicates)),
            subject_frequency=MappingProxyType(dict(subjects)),
            object_frequency=MappingProxyType(dict(objects)),
            paragraph_count=paragraph_count,
            sentence_count=sentence_count,
        )

    @property
    def triples(self) -> tuple[SemanticTriple, ...]:
        """Alle Tripel: erst Absatz-, dann Satzebene."""
        return self.paragraph_triples + self.sentence_triples

    @property
    def total_triples(self) -> int:
        return len(self.paragraph_triples) + len(self.sentence_triples)

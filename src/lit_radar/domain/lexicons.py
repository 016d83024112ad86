"""Feste Domain-Lexika fuer Extraktion und Relevanzbewertung.

Die Lexika werden einmal konstruiert und per Referenz geteilt. Alle Eintraege
sind kleingeschrieben gespeichert, Vergleiche erfolgen case-insensitiv.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

# Energetische Materialien und Prozesse
DOMAIN_ENTITIES: tuple[str, ...] = (
    "TNT", "RDX", "HMX", "PETN", "TATB", "nitroglycerine", "nitrocellulose",
    "ammonium nitrate", "potassium perchlorate", "explosive", "propellant",
    "detonator", "blast", "detonation", "combustion", "ignition",
)

# Praedikate mit Handlungscharakter (exakter Vergleich, kleingeschrieben)
ACTION_VERBS: tuple[str, ...] = (
    "increases", "decreases", "causes", "produces", "exhibits", "shows",
    "demonstrates", "has", "contains", "includes", "forms", "creates",
    "synthesizes", "reacts", "combines", "detonates", "explodes", "burns",
)

# Material- und Leistungseigenschaften
PROPERTY_TERMS: tuple[str, ...] = (
    "temperature", "pressure", "density", "velocity", "sensitivity",
    "stability", "performance", "energy", "power", "strength",
    "composition", "structure", "property", "characteristic",
)


def _normalize(terms: Iterable[str]) -> frozenset[str]:
    return frozenset(t.strip().lower() for t in terms if t.strip())


@dataclass(frozen=True, slots=True)
class DomainLexicon:
    """Read-only Lexikon-Konfiguration eines Extraktors.

    Attributes:
        entities: Domain-Entitaeten (Substring-Vergleich).
        action_verbs: Handlungsverben (exakter Vergleich mit dem Praedikat).
        property_terms: Eigenschaftsbegriffe (Substring-Vergleich).
    """

    entities: frozenset[str]
    action_verbs: frozenset[str]
    property_terms: frozenset[str]

    @classmethod
    def from_terms(
        cls,
        entities: Iterable[str],
        action_verbs: Iterable[str],
        property_terms: Iterable[str],
    ) -> DomainLexicon:
        """Lexikon aus beliebigen Begriffslisten erzeugen (normalisiert)."""
        return cls(
            entities=_normalize(entities),
            action_verbs=_normalize(action_verbs),
            property_terms=_normalize(property_terms),
        )

    def mentions_entity(self, text: str) -> bool:
        lowered = text.lower()
        return any(entity in lowered for entity in self.entities)

    def mentions_property(self, text: str) -> bool:
        lowered = text.lower()
        return any(term in lowered for term in self.property_terms)

    def is_action_verb(self, predicate: str) -> bool:
        return predicate.lower() in self.action_verbs


DEFAULT_LEXICON = DomainLexicon.from_terms(DOMAIN_ENTITIES, ACTION_VERBS, PROPERTY_TERMS)

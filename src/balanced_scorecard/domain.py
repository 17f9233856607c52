"""
Domain beinhaltet die Entities + Enums + Fehlerklassen

Dieses Modul enthält nur die Fachlogik.
Es enthält keine UI-Logik und keine Datenstrukturen des Registers.

- Entities sind Dataclasses.
- Sie prüfen ihre Grundregeln in __post_init__.
- Performance und Band werden immer berechnet und nicht gespeichert.
- "Keine Daten" ist kein Fehler, sondern None.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .config import (
    BAND_CAUTION_FROM,
    BAND_EXCEEDS_ABOVE,
    BAND_MEETS_FROM,
    MAX_NAME_LENGTH,
)


class ScorecardError(Exception):
    """Basisklasse aller Fehler der Anwendung. Alle Fehler sind behebbar."""


class CapacityExceededError(ScorecardError):
    """Das Limit für Perspektiven ist erreicht. Der Zustand bleibt unverändert."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"Cannot add perspective - limit reached ({limit}).")
        self.limit = limit


class PerspectiveNotFoundError(ScorecardError):
    """Eine Perspektive konnte über ihren Namen nicht gefunden werden."""

    def __init__(self, name: str, message: str | None = None) -> None:
        super().__init__(message or f"Perspective not found: '{name}'.")
        self.name = name


class InvalidInputError(ScorecardError, ValueError):
    """Ungültige Werte für eine Entity (z.B. negativer Ist-Wert)."""


def normalize_name(name: str) -> str:
    """
    Schneidet einen Namen auf MAX_NAME_LENGTH Zeichen.
    Groß/Klein bleibt erhalten.
    """
    return name[:MAX_NAME_LENGTH]


def name_key(name: str) -> str:
    """Vergleichsschlüssel für case-insensitive Gleichheit."""
    return normalize_name(name).lower()


class PerformanceBand(Enum):
    """
    Leistungsbänder für Performance-Werte in Prozent.
    - exceeds: > 100
    - meets: 80..100
    - caution: 20..<80
    - critical: < 20
    """
    exceeds = "exceeds"
    meets = "meets"
    caution = "caution"
    critical = "critical"

    @classmethod
    def classify(cls, performance: float) -> "PerformanceBand":
        """Ordnet einen Prozentwert einem Band zu."""
        if performance > BAND_EXCEEDS_ABOVE:
            return cls.exceeds
        if performance >= BAND_MEETS_FROM:
            return cls.meets
        if performance >= BAND_CAUTION_FROM:
            return cls.caution
        return cls.critical


@dataclass(frozen=True, slots=True)
class KPI:
    """
    Ein Key Performance Indicator.
    Wird einmal angelegt und danach nicht mehr verändert.

    - Zielwert 0 ist erlaubt: Performance ist dann 0 und zählt nicht zum Durchschnitt.
    - Ist-Wert muss >= 0 sein.
    """
    name: str
    target: float
    achieved: float

    def __post_init__(self) -> None:
        """Prüft Grundregeln nach dem Erzeugen."""
        if not self.name:
            raise InvalidInputError("KPI name cannot be empty.")
        if not math.isfinite(self.target):
            raise InvalidInputError(f"target must be a finite number, got {self.target}.")
        if not math.isfinite(self.achieved):
            raise InvalidInputError(f"achieved must be a finite number, got {self.achieved}.")
        if self.achieved < 0:
            raise InvalidInputError(f"achieved must be >= 0, got {self.achieved}.")
        object.__setattr__(self, "name", normalize_name(self.name))

    def has_target(self) -> bool:
        """Wahr, wenn der KPI messbar ist (Zielwert ungleich 0)."""
        return self.target != 0

    def performance(self) -> float:
        """Erreicht/Ziel in Prozent. Bei Zielwert 0: 0.0."""
        if not self.has_target():
            return 0.0
        return (self.achieved / self.target) * 100.0

    def band(self) -> PerformanceBand:
        """Leistungsband der Performance."""
        return PerformanceBand.classify(self.performance())


@dataclass(slots=True)
class Perspective:
    """
    Eine Perspektive (z.B. Financial, Customer) mit ihren KPIs.
    - Der Name behält die Schreibweise der ersten Anlage.
    - Die KPI-Liste ist neueste-zuerst sortiert.
    """
    name: str
    kpis: List[KPI] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Prüft den Namen."""
        if not self.name:
            raise InvalidInputError("Perspective name cannot be empty.")
        self.name = normalize_name(self.name)

    def add_kpi(self, kpi: KPI) -> None:
        """Fügt einen KPI vorne an."""
        self.kpis.insert(0, kpi)

    def matches(self, name: str) -> bool:
        """Case-insensitive Namensvergleich."""
        return name_key(self.name) == name_key(name)

    def clear(self) -> None:
        """Gibt alle KPIs frei."""
        self.kpis.clear()

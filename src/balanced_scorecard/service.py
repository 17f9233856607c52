"""
Application/Use-Case layer

Die ScoreEngine berechnet Kennzahlen aus der Registry.
Sie liest nur und ändert nichts.
Sie erzeugt einen EvaluationState und KPI-Zeilen als ViewModel für die ConsoleScorecardView.

"Keine Daten" wird immer als None dargestellt, nie als 0.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .config import IMPACT_THRESHOLD
from .domain import KPI, Perspective, PerformanceBand
from .registry import PerspectiveSnapshot, Registry


@dataclass(slots=True)
class KpiZeile:
    """Ein KPI mit berechneter Performance für die Anzeige."""
    name: str
    target: float
    achieved: float
    performance: float
    band: PerformanceBand


@dataclass(slots=True)
class PerspectiveKpis:
    """Eine Perspektive mit ihren KPIs (neueste zuerst)."""
    perspective: str
    kpis: List[KpiZeile] = field(default_factory=list)


@dataclass(slots=True)
class PerspectiveAverage:
    """
    Durchschnitt einer Perspektive.
    average ist None, wenn es keine messbaren KPIs gibt.
    """
    index: int
    perspective: str
    average: Optional[float]
    kpi_count: int = 0

    @property
    def has_data(self) -> bool:
        return self.average is not None

    @property
    def band(self) -> Optional[PerformanceBand]:
        if self.average is None:
            return None
        return PerformanceBand.classify(self.average)


@dataclass(slots=True)
class ImpactNotice:
    """
    Hinweis aus der Abhängigkeits-Analyse.
    source schneidet schwach ab und kann target beeinflussen.
    """
    source: str
    target: str
    average: float

    @property
    def message(self) -> str:
        return f"Low performance in {self.source} ({self.average:.2f}%) may affect {self.target}."


@dataclass(slots=True)
class EvaluationState:
    """
    Datenobjekt für die View.
    """
    # Pro Perspektive (Einfügereihenfolge)
    averages: List[PerspectiveAverage] = field(default_factory=list)

    # Gesamt
    overall_average: Optional[float] = None

    # Abhängigkeiten
    impacts: List[ImpactNotice] = field(default_factory=list)

    # Schwächste Perspektive
    lowest: Optional[PerspectiveAverage] = None

    @property
    def has_perspectives(self) -> bool:
        return bool(self.averages)

    @property
    def has_data(self) -> bool:
        return self.overall_average is not None


class ScoreEngine:
    """
    Service für die Auswertung.
    Er liest Daten aus der Registry, berechnet KPIs und baut ein ViewModel.
    """

    def __init__(self, impact_threshold: float = IMPACT_THRESHOLD) -> None:
        self._impact_threshold = impact_threshold

    @staticmethod
    def kpi_performance(kpi: KPI) -> float:
        """Erreicht/Ziel * 100, bei Zielwert 0 genau 0."""
        return kpi.performance()

    def perspective_average(self, perspective: Union[Perspective, PerspectiveSnapshot]) -> Optional[float]:
        """
        Durchschnitt über alle KPIs mit Zielwert ungleich 0.
        Ohne solche KPIs: None.
        """
        total, count = self._sum_performance(perspective.kpis)
        if count == 0:
            return None
        return total / count

    def overall_average(self, averages: Sequence[Optional[float]]) -> Optional[float]:
        """Durchschnitt über alle Perspektiven mit Daten. Ohne Daten: None."""
        present = [a for a in averages if a is not None]
        if not present:
            return None
        return sum(present) / len(present)

    def dependency_impacts(
        self,
        edges: Iterable[Tuple[int, int]],
        averages: Sequence[PerspectiveAverage]
    ) -> List[ImpactNotice]:
        """
        Prüft jede Kante i -> j.
        Gemeldet wird, wenn der Durchschnitt von i im Bereich (0, Schwelle) liegt.

        Ein echter Durchschnitt von genau 0 wird nicht gemeldet.
        """
        by_index: Dict[int, PerspectiveAverage] = {a.index: a for a in averages}
        notices: List[ImpactNotice] = []

        for i, j in edges:
            source = by_index.get(i)
            target = by_index.get(j)
            if source is None or target is None or source.average is None:
                continue
            if 0.0 < source.average < self._impact_threshold:
                notices.append(ImpactNotice(source.perspective, target.perspective, source.average))

        return notices

    def lowest_performer(self, averages: Sequence[PerspectiveAverage]) -> Optional[PerspectiveAverage]:
        """
        Perspektive mit dem kleinsten Durchschnitt.
        - Nur Perspektiven mit Daten zählen.
        - Bei Gleichstand gewinnt die erste in Einfügereihenfolge.
        """
        lowest: Optional[PerspectiveAverage] = None
        for entry in averages:
            if entry.average is None:
                continue
            if lowest is None or entry.average < lowest.average:
                lowest = entry
        return lowest

    def list_kpis(self, registry: Registry) -> List[PerspectiveKpis]:
        """
        KPIs aller Perspektiven.
        Perspektiven in Baum-Reihenfolge, KPIs neueste zuerst.
        Grundlage ist eine einzige Momentaufnahme der Registry.
        """
        result: List[PerspectiveKpis] = []
        for p in registry.snapshot().by_name:
            zeilen = [
                KpiZeile(
                    name=k.name,
                    target=k.target,
                    achieved=k.achieved,
                    performance=self.kpi_performance(k),
                    band=k.band(),
                )
                for k in p.kpis
            ]
            result.append(PerspectiveKpis(perspective=p.name, kpis=zeilen))
        return result

    def evaluate(self, registry: Registry) -> EvaluationState:
        """
        Baut den kompletten EvaluationState.
        - Durchschnitt pro Perspektive
        - Gesamtdurchschnitt
        - Abhängigkeits-Analyse
        - Schwächste Perspektive

        Alle Werte stammen aus derselben Momentaufnahme der Registry.
        """
        snapshot = registry.snapshot()

        averages: List[PerspectiveAverage] = []
        for p in snapshot.by_index:
            total, count = self._sum_performance(p.kpis)
            avg = total / count if count > 0 else None
            averages.append(PerspectiveAverage(index=p.index, perspective=p.name, average=avg, kpi_count=count))

        state = EvaluationState(averages=averages)
        state.overall_average = self.overall_average([a.average for a in averages])
        state.impacts = self.dependency_impacts(snapshot.edges, averages)
        state.lowest = self.lowest_performer(averages)
        return state

    def _sum_performance(self, kpis: Iterable[KPI]) -> tuple[float, int]:
        """
        Summe und Anzahl der messbaren KPIs.
        KPIs mit Zielwert 0 zählen nicht mit.
        """
        total = 0.0
        count = 0
        for k in kpis:
            if k.has_target():
                total += self.kpi_performance(k)
                count += 1
        return total, count

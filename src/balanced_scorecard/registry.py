"""
Registry: zentrale Datenhaltung

Die Registry verbindet NameIndex (Baum) und DependencyGraph (Namenstabelle + Kanten).
Beide enthalten immer genau dieselbe Menge an Namen.

- Jede Änderung läuft über die Registry.
- Änderungen laufen unter einer Sperre, damit parallele Aufrufer nie einen halben Zustand sehen.
- Es gibt kein Löschen. Das Modell wächst nur.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .config import MAX_PERSPECTIVES
from .domain import (
    KPI,
    CapacityExceededError,
    Perspective,
    PerspectiveNotFoundError,
    name_key,
)
from .graph import DependencyGraph
from .name_index import NameIndex

logger = logging.getLogger(__name__)


class DependencyResult(Enum):
    """Ergebnis von add_dependency. Beides ist kein Fehler."""
    created = "created"
    already_existed = "already_existed"


@dataclass(frozen=True, slots=True)
class PerspectiveSnapshot:
    """Kopie einer Perspektive: Index in der Namenstabelle, Name, KPIs neueste zuerst."""
    index: int
    name: str
    kpis: Tuple[KPI, ...]


@dataclass(frozen=True, slots=True)
class RegistrySnapshot:
    """
    Momentaufnahme der Registry aus einem einzigen Lesevorgang.
    - by_index: Einfügereihenfolge, passend zu den Kanten
    - by_name: Baum-Reihenfolge (case-sensitive lexikographisch)
    - edges: alle Kanten zeilenweise aufsteigend
    """
    by_index: Tuple[PerspectiveSnapshot, ...]
    by_name: Tuple[PerspectiveSnapshot, ...]
    edges: Tuple[Tuple[int, int], ...]


class Registry:
    """
    Einzige Quelle der Wahrheit für Perspektiven, KPIs und Abhängigkeiten.
    """

    def __init__(self, capacity: int = MAX_PERSPECTIVES) -> None:
        self._index = NameIndex()
        self._graph = DependencyGraph(capacity)
        self._lock = threading.RLock()

    @property
    def capacity(self) -> int:
        """Maximale Anzahl Perspektiven."""
        return self._graph.capacity

    @property
    def is_full(self) -> bool:
        """Wahr, wenn keine neue Perspektive mehr passt."""
        return self._graph.is_full

    @property
    def graph(self) -> DependencyGraph:
        """Der zugrunde liegende Graph (nur lesend verwenden)."""
        return self._graph

    def __len__(self) -> int:
        """Anzahl der Perspektiven."""
        return len(self._graph)

    def add_perspective_if_absent(self, name: str) -> bool:
        """
        Legt eine Perspektive an, wenn sie fehlt.

        - Leerer Name: nichts passiert
        - Name schon vorhanden (case-insensitive): nichts passiert
        - Register voll: CapacityExceededError, Zustand bleibt gleich
        - Sonst: Namenstabelle und Baum werden zusammen erweitert

        Rückgabe: True, wenn neu angelegt.
        """
        if not name:
            return False

        with self._lock:
            if self._graph.index_of(name) is not None:
                return False

            # Erst die Tabelle (kann ablehnen), dann der Baum.
            index = self._graph.ensure_capacity(name)
            perspective = self._index.insert(name)
            logger.info("Perspective added: %s (index %d)", perspective.name, index)
            return True

    def add_dependency(self, from_name: str, to_name: str) -> DependencyResult:
        """
        Legt die Kante from -> to an.
        Unbekannte Namen werden vorher als Perspektive angelegt.

        Fehler:
        - PerspectiveNotFoundError, wenn ein Ende nicht auflösbar ist
        - CapacityExceededError, wenn nicht beide fehlenden Enden Platz haben

        Beide Fehler werden vor jeder Änderung geprüft.
        """
        with self._lock:
            if not from_name or not to_name:
                missing = from_name if not from_name else to_name
                logger.error("Dependency endpoints unresolvable: '%s' -> '%s'", from_name, to_name)
                raise PerspectiveNotFoundError(missing, "One or both perspectives not found.")

            # Fehlende Enden zählen (case-insensitive, ohne Doppelte).
            fehlend = {
                name_key(n) for n in (from_name, to_name)
                if self._graph.index_of(n) is None
            }
            if len(fehlend) > self.capacity - len(self._graph):
                logger.warning(
                    "Perspective limit reached (%d), rejected dependency '%s' -> '%s'.",
                    self.capacity, from_name, to_name,
                )
                raise CapacityExceededError(self.capacity)

            self.add_perspective_if_absent(from_name)
            self.add_perspective_if_absent(to_name)

            fi = self._graph.index_of(from_name)
            ti = self._graph.index_of(to_name)
            if fi is None or ti is None:
                missing = from_name if fi is None else to_name
                logger.error("Dependency endpoints unresolvable: '%s' -> '%s'", from_name, to_name)
                raise PerspectiveNotFoundError(missing, "One or both perspectives not found.")

            if self._graph.add_edge(fi, ti):
                return DependencyResult.created
            return DependencyResult.already_existed

    def add_kpi(self, perspective_name: str, kpi_name: str, target: float, achieved: float) -> KPI:
        """
        Fügt einen KPI zu einer Perspektive hinzu.
        Die Perspektive wird bei Bedarf angelegt.
        Der neue KPI steht danach vorne in der Liste.

        Fehler:
        - InvalidInputError bei ungültigen KPI-Werten
        - PerspectiveNotFoundError, wenn die Perspektive danach nicht im Baum ist
        """
        kpi = KPI(kpi_name, float(target), float(achieved))

        with self._lock:
            self.add_perspective_if_absent(perspective_name)

            perspective = self._index.find(perspective_name) if perspective_name else None
            if perspective is None:
                logger.error("Perspective node not found after insertion: '%s'", perspective_name)
                raise PerspectiveNotFoundError(perspective_name)

            perspective.add_kpi(kpi)
            logger.info("KPI added: %s under %s", kpi.name, perspective.name)
            return kpi

    def index_of(self, name: str) -> Optional[int]:
        """Fester Index eines Namens oder None."""
        with self._lock:
            return self._graph.index_of(name)

    find_perspective_index = index_of

    def find(self, name: str) -> Optional[Perspective]:
        """Perspektive über den Baum (case-insensitive) oder None."""
        with self._lock:
            return self._index.find(name) if name else None

    def list_perspectives(self) -> List[str]:
        """Namen in Einfügereihenfolge."""
        with self._lock:
            return list(self._graph.names)

    def list_dependencies(self) -> List[Tuple[str, List[str]]]:
        """
        Für jede Perspektive (Einfügereihenfolge) die Namen ihrer Nachfolger.
        Nachfolger sind nach Index sortiert.
        """
        with self._lock:
            names = self._graph.names
            return [
                (name, [names[j] for j in self._graph.neighbors(i)])
                for i, name in enumerate(names)
            ]

    def perspectives_sorted(self) -> List[Perspective]:
        """Perspektiven in Baum-Reihenfolge (case-sensitive lexikographisch)."""
        with self._lock:
            return list(self._index.inorder())

    def edges(self) -> List[Tuple[int, int]]:
        """Alle Kanten als Liste (Momentaufnahme)."""
        with self._lock:
            return list(self._graph.edges())

    def snapshot(self) -> RegistrySnapshot:
        """
        Liest Perspektiven, KPIs und Kanten unter einer einzigen Sperre.
        KPI-Listen werden kopiert, spätere Änderungen wirken nicht zurück.
        """
        with self._lock:
            by_index = []
            for i, name in enumerate(self._graph.names):
                perspective = self._index.find(name)
                if perspective is None:
                    raise PerspectiveNotFoundError(name, f"Registry out of sync: '{name}' missing in index.")
                by_index.append(PerspectiveSnapshot(i, perspective.name, tuple(perspective.kpis)))

            by_key = {name_key(s.name): s for s in by_index}
            by_name = tuple(by_key[name_key(p.name)] for p in self._index.inorder())

            return RegistrySnapshot(
                by_index=tuple(by_index),
                by_name=by_name,
                edges=tuple(self._graph.edges()),
            )

    def close(self) -> None:
        """
        Gibt alles frei.
        Baum (mit KPIs) und Graph werden komplett geleert.
        """
        with self._lock:
            self._index.destroy()
            self._graph.clear()
            logger.debug("Registry closed.")

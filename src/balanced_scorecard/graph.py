"""
DependencyGraph: gerichtete Abhängigkeiten zwischen Perspektiven

Eine Kante i -> j bedeutet:
"Wenn i schlecht abschneidet, kann j darunter leiden."

- Die Namenstabelle ist nach Einfügereihenfolge sortiert.
- Die Position eines Namens ist sein fester Index für die Kanten.
- Indizes werden nur angehängt, nie wiederverwendet oder verschoben.
- Die Kapazität ist fest. Bei vollem Register wird abgelehnt, nicht vergrößert.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Set, Tuple

from .config import MAX_PERSPECTIVES
from .domain import CapacityExceededError, name_key, normalize_name

logger = logging.getLogger(__name__)


class DependencyGraph:
    """
    Namenstabelle + Adjazenz als Liste von Mengen.
    Zeile i enthält alle j mit Kante i -> j.
    """

    def __init__(self, capacity: int = MAX_PERSPECTIVES) -> None:
        """
        Erstellt einen leeren Graphen.
        - capacity: maximale Anzahl Perspektiven
        """
        if capacity <= 0:
            raise ValueError(f"capacity muss > 0 sein, ist aber {capacity}.")
        self._capacity = capacity
        self._names: List[str] = []
        self._adjacency: List[Set[int]] = []

    @property
    def capacity(self) -> int:
        """Maximale Anzahl Namen."""
        return self._capacity

    @property
    def names(self) -> Tuple[str, ...]:
        """Namen in Einfügereihenfolge (nur lesend)."""
        return tuple(self._names)

    @property
    def is_full(self) -> bool:
        """Wahr, wenn die Namenstabelle voll ist."""
        return len(self._names) >= self._capacity

    def __len__(self) -> int:
        """Anzahl der Namen."""
        return len(self._names)

    def index_of(self, name: str) -> Optional[int]:
        """Case-insensitive lineare Suche in der Namenstabelle."""
        key = name_key(name)
        for i, existing in enumerate(self._names):
            if existing.lower() == key:
                return i
        return None

    def ensure_capacity(self, name: str) -> int:
        """
        Liefert den Index eines Namens.
        Fehlt der Name, wird er angehängt.

        Fehler:
        - CapacityExceededError, wenn die Tabelle voll ist (ohne Änderung)
        """
        index = self.index_of(name)
        if index is not None:
            return index

        if self.is_full:
            logger.warning("Perspective limit reached (%d), rejected '%s'.", self._capacity, name)
            raise CapacityExceededError(self._capacity)

        self._names.append(normalize_name(name))
        self._adjacency.append(set())
        return len(self._names) - 1

    def add_edge(self, from_index: int, to_index: int) -> bool:
        """
        Setzt die Kante from -> to.
        - True: neu angelegt
        - False: war schon vorhanden
        """
        self._check_index(from_index)
        self._check_index(to_index)

        row = self._adjacency[from_index]
        if to_index in row:
            return False
        row.add(to_index)
        logger.debug("Edge added: %s -> %s", self._names[from_index], self._names[to_index])
        return True

    def has_edge(self, from_index: int, to_index: int) -> bool:
        """Wahr, wenn die Kante from -> to existiert."""
        self._check_index(from_index)
        self._check_index(to_index)
        return to_index in self._adjacency[from_index]

    def neighbors(self, index: int) -> List[int]:
        """Alle j mit Kante index -> j, aufsteigend sortiert."""
        self._check_index(index)
        return sorted(self._adjacency[index])

    def edges(self) -> Iterator[Tuple[int, int]]:
        """Alle Kanten zeilenweise, jeweils aufsteigend nach Index."""
        for i in range(len(self._names)):
            for j in sorted(self._adjacency[i]):
                yield i, j

    def clear(self) -> None:
        """Entfernt alle Namen und Kanten."""
        self._names.clear()
        self._adjacency.clear()

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._names):
            raise IndexError(f"Perspective index out of range: {index}")

"""
NameIndex: Suchbaum über Perspektiven-Namen

Der Baum ist als Arena gebaut.
- Alle Knoten liegen in einer Liste.
- Kinder werden über Listen-Indizes referenziert, nicht über Objekte.

Zwei Ordnungen gelten gleichzeitig:
- Struktur: case-sensitive (ordinal, "Internal" < "internal").
- Suche: case-insensitive ("internal" findet "Internal").

Die Suche kann daher nicht über die Struktur abkürzen.
Sie besucht immer erst den Knoten, dann den ganzen linken, dann den rechten Teilbaum.
Die Traversierung (inorder) liefert die case-sensitive Reihenfolge.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional

from .domain import Perspective, normalize_name

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Node:
    """Ein Knoten im Baum. left/right sind Indizes in die Arena."""
    perspective: Perspective
    left: Optional[int] = None
    right: Optional[int] = None


class NameIndex:
    """
    Binärer Suchbaum für Perspektiven.
    Es gibt genau einen Knoten pro case-insensitive Namen.
    """

    def __init__(self) -> None:
        self._nodes: List[_Node] = []
        self._root: Optional[int] = None

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find(name) is not None

    def __iter__(self) -> Iterator[Perspective]:
        return self.inorder()

    def insert(self, name: str) -> Perspective:
        """
        Fügt eine Perspektive ein.

        - Existiert der Name (case-insensitive), wird der vorhandene Eintrag geliefert.
        - Sonst: kleiner geht nach links, größer nach rechts (case-sensitive).
        """
        existing = self.find(name)
        if existing is not None:
            return existing

        perspective = Perspective(name)
        key = perspective.name

        if self._root is None:
            self._root = self._append(perspective)
            return perspective

        current = self._root
        while True:
            node = self._nodes[current]
            if key < node.perspective.name:
                if node.left is None:
                    node.left = self._append(perspective)
                    return perspective
                current = node.left
            elif key > node.perspective.name:
                if node.right is None:
                    node.right = self._append(perspective)
                    return perspective
                current = node.right
            else:
                # Gleich nach case-sensitive Vergleich: schon vorhanden.
                return node.perspective

    def find(self, name: str) -> Optional[Perspective]:
        """
        Sucht eine Perspektive case-insensitive.
        Reihenfolge: Knoten, linker Teilbaum komplett, dann rechter Teilbaum.
        """
        return self._find_from(self._root, normalize_name(name).lower())

    def _find_from(self, index: Optional[int], key: str) -> Optional[Perspective]:
        if index is None:
            return None
        node = self._nodes[index]
        if node.perspective.name.lower() == key:
            return node.perspective
        found = self._find_from(node.left, key)
        if found is not None:
            return found
        return self._find_from(node.right, key)

    def inorder(self) -> Iterator[Perspective]:
        """
        Lazy inorder-Traversierung (links, Knoten, rechts).
        Jeder Aufruf startet eine neue Traversierung.
        """
        stack: List[int] = []
        current = self._root
        while stack or current is not None:
            while current is not None:
                stack.append(current)
                current = self._nodes[current].left
            current = stack.pop()
            node = self._nodes[current]
            yield node.perspective
            current = node.right

    def destroy(self) -> None:
        """
        Gibt den kompletten Baum frei.
        Erst alle KPI-Listen, dann alle Knoten.
        """
        for node in self._nodes:
            node.perspective.clear()
        count = len(self._nodes)
        self._nodes.clear()
        self._root = None
        logger.debug("NameIndex destroyed (%d nodes released).", count)

    def _append(self, perspective: Perspective) -> int:
        self._nodes.append(_Node(perspective))
        return len(self._nodes) - 1

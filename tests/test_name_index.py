"""
Tests für den NameIndex (Suchbaum).

Struktur ist case-sensitive, Suche ist case-insensitive.
"""

from balanced_scorecard.domain import KPI
from balanced_scorecard.name_index import NameIndex


class TestInsertAndFind:
    """Einfügen und Suchen."""

    def test_find_is_case_insensitive(self):
        index = NameIndex()
        index.insert("Internal")
        found = index.find("INTERNAL")
        assert found is not None
        assert found.name == "Internal"

    def test_insert_same_name_other_case_returns_existing(self):
        """Nur ein Knoten pro case-insensitive Namen, Schreibweise der ersten Anlage."""
        index = NameIndex()
        first = index.insert("Internal")
        second = index.insert("internal")
        assert second is first
        assert len(index) == 1
        assert first.name == "Internal"

    def test_find_missing_returns_none(self):
        index = NameIndex()
        index.insert("Customer")
        assert index.find("Financial") is None

    def test_find_on_empty_tree(self):
        assert NameIndex().find("anything") is None

    def test_find_reaches_right_subtree(self):
        """Die Suche darf nicht über die case-sensitive Ordnung abkürzen."""
        index = NameIndex()
        for name in ("M", "B", "a"):
            index.insert(name)
        # "a" liegt rechts von "M" (ordinal: "M" < "a"), gesucht wird mit "A" < "M".
        assert index.find("A").name == "a"

    def test_contains(self):
        index = NameIndex()
        index.insert("Learning")
        assert "learning" in index
        assert "Customer" not in index
        assert 42 not in index


class TestTraversal:
    """Inorder-Traversierung."""

    def test_inorder_is_case_sensitive_lexicographic(self):
        index = NameIndex()
        for name in ("Financial", "Customer", "Internal", "Learning", "alpha", "Zeta"):
            index.insert(name)
        names = [p.name for p in index]
        assert names == ["Customer", "Financial", "Internal", "Learning", "Zeta", "alpha"]

    def test_traversal_is_lazy_and_restartable(self):
        index = NameIndex()
        for name in ("b", "a", "c"):
            index.insert(name)
        it = index.inorder()
        assert next(it).name == "a"
        # Ein neuer Aufruf beginnt wieder von vorne.
        assert [p.name for p in index.inorder()] == ["a", "b", "c"]
        assert [p.name for p in it] == ["b", "c"]

    def test_empty_traversal(self):
        assert list(NameIndex()) == []


class TestDestroy:
    """Freigabe des Baums."""

    def test_destroy_releases_kpis_and_nodes(self):
        index = NameIndex()
        p = index.insert("Customer")
        p.add_kpi(KPI("NPS", 10.0, 5.0))
        index.insert("Financial")

        index.destroy()

        assert len(index) == 0
        assert p.kpis == []
        assert index.find("Customer") is None
        assert list(index) == []

    def test_insert_after_destroy(self):
        index = NameIndex()
        index.insert("Customer")
        index.destroy()
        index.insert("Financial")
        assert [p.name for p in index] == ["Financial"]

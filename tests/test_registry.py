"""
Tests für die Registry.

Baum und Namenstabelle müssen immer dieselben Namen enthalten.
"""

import threading

import pytest

from balanced_scorecard.domain import (
    CapacityExceededError,
    InvalidInputError,
    PerspectiveNotFoundError,
)
from balanced_scorecard.registry import DependencyResult, Registry


def _same_names(registry):
    tree = sorted(p.name for p in registry.perspectives_sorted())
    table = sorted(registry.list_perspectives())
    return tree == table


class TestAddPerspective:
    """add_perspective_if_absent."""

    def test_names_differing_in_case_stored_once(self, registry):
        assert registry.add_perspective_if_absent("Internal") is True
        assert registry.add_perspective_if_absent("internal") is False
        assert registry.list_perspectives() == ["Internal"]
        assert [p.name for p in registry.perspectives_sorted()] == ["Internal"]

    def test_empty_name_is_noop(self, registry):
        assert registry.add_perspective_if_absent("") is False
        assert len(registry) == 0

    def test_insertion_order_kept(self, registry):
        for name in ("Financial", "Customer", "Internal", "Learning"):
            registry.add_perspective_if_absent(name)
        assert registry.list_perspectives() == ["Financial", "Customer", "Internal", "Learning"]

    def test_indices_stable(self, registry):
        registry.add_perspective_if_absent("Financial")
        registry.add_perspective_if_absent("Customer")
        before = {n: registry.index_of(n) for n in ("Financial", "Customer")}

        for name in ("Internal", "Learning", "Alpha", "Beta"):
            registry.add_perspective_if_absent(name)

        assert {n: registry.index_of(n) for n in before} == before
        assert registry.index_of("Beta") == 5
        assert registry.find_perspective_index("beta") == 5

    def test_capacity_exceeded_leaves_table_and_tree_unchanged(self):
        registry = Registry(capacity=3)
        for name in ("A", "B", "C"):
            registry.add_perspective_if_absent(name)

        with pytest.raises(CapacityExceededError):
            registry.add_perspective_if_absent("D")

        assert registry.list_perspectives() == ["A", "B", "C"]
        assert registry.find("D") is None
        assert _same_names(registry)

    def test_existing_name_when_full_is_noop(self):
        registry = Registry(capacity=1)
        registry.add_perspective_if_absent("A")
        assert registry.add_perspective_if_absent("a") is False


class TestAddDependency:
    """add_dependency."""

    def test_idempotent(self, registry):
        assert registry.add_dependency("Learning", "Internal") is DependencyResult.created
        assert registry.add_dependency("learning", "INTERNAL") is DependencyResult.already_existed
        assert registry.edges() == [(0, 1)]

    def test_unknown_names_are_created(self, registry):
        registry.add_dependency("Learning", "Internal")
        assert registry.list_perspectives() == ["Learning", "Internal"]
        assert _same_names(registry)

    def test_no_reverse_edge(self, registry):
        registry.add_dependency("Learning", "Internal")
        assert registry.list_dependencies() == [("Learning", ["Internal"]), ("Internal", [])]

    def test_empty_endpoint_not_found(self, registry):
        with pytest.raises(PerspectiveNotFoundError):
            registry.add_dependency("", "Internal")

    def test_capacity_error_propagates(self):
        registry = Registry(capacity=1)
        registry.add_perspective_if_absent("A")
        with pytest.raises(CapacityExceededError):
            registry.add_dependency("A", "B")
        assert registry.edges() == []
        assert registry.list_perspectives() == ["A"]

    def test_capacity_checked_for_both_new_endpoints(self):
        registry = Registry(capacity=2)
        registry.add_perspective_if_absent("A")
        with pytest.raises(CapacityExceededError):
            registry.add_dependency("B", "C")
        assert registry.list_perspectives() == ["A"]
        assert registry.find("B") is None
        assert registry.edges() == []
        assert _same_names(registry)

    def test_same_new_name_needs_one_slot(self):
        registry = Registry(capacity=2)
        registry.add_perspective_if_absent("A")
        assert registry.add_dependency("B", "b") is DependencyResult.created
        assert registry.list_perspectives() == ["A", "B"]
        assert registry.edges() == [(1, 1)]

    def test_empty_endpoint_creates_nothing(self, registry):
        with pytest.raises(PerspectiveNotFoundError):
            registry.add_dependency("Quality", "")
        assert len(registry) == 0
        assert registry.find("Quality") is None


class TestAddKpi:
    """add_kpi."""

    def test_kpi_creates_perspective(self, registry):
        registry.add_kpi("Customer", "NPS", 50, 40)
        assert registry.list_perspectives() == ["Customer"]
        assert [k.name for k in registry.find("customer").kpis] == ["NPS"]

    def test_newest_first(self, registry):
        registry.add_kpi("Customer", "NPS", 50, 40)
        registry.add_kpi("customer", "Churn", 10, 5)
        assert [k.name for k in registry.find("Customer").kpis] == ["Churn", "NPS"]

    def test_empty_perspective_not_found(self, registry):
        with pytest.raises(PerspectiveNotFoundError):
            registry.add_kpi("", "NPS", 50, 40)
        assert len(registry) == 0

    def test_invalid_kpi_does_not_create_perspective(self, registry):
        with pytest.raises(InvalidInputError):
            registry.add_kpi("Customer", "NPS", 50, -1)
        assert len(registry) == 0

    def test_capacity_error_for_new_perspective(self):
        registry = Registry(capacity=1)
        registry.add_kpi("A", "k", 10, 1)
        with pytest.raises(CapacityExceededError):
            registry.add_kpi("B", "k", 10, 1)


class TestListing:
    """Listen und Freigabe."""

    def test_sorted_vs_insertion_order(self, standard_registry):
        assert [p.name for p in standard_registry.perspectives_sorted()] == [
            "Customer", "Financial", "Internal", "Learning",
        ]
        assert [p.name for p in standard_registry.snapshot().by_index] == [
            "Financial", "Customer", "Internal", "Learning",
        ]

    def test_list_dependencies(self, standard_registry):
        assert standard_registry.list_dependencies() == [
            ("Financial", []),
            ("Customer", ["Financial"]),
            ("Internal", ["Customer"]),
            ("Learning", ["Internal"]),
        ]

    def test_close_releases_everything(self, standard_registry):
        standard_registry.add_kpi("Customer", "NPS", 50, 40)
        customer = standard_registry.find("Customer")
        standard_registry.close()
        assert len(standard_registry) == 0
        assert standard_registry.perspectives_sorted() == []
        assert customer.kpis == []


class TestConcurrentAccess:
    """Parallele Aufrufer sehen immer einen konsistenten Zustand."""

    def test_parallel_adds_stay_in_sync(self):
        registry = Registry(capacity=10)
        names = [f"P{i}" for i in range(10)]

        def worker(offset):
            for i in range(10):
                name = names[(i + offset) % 10]
                registry.add_perspective_if_absent(name)
                registry.add_kpi(name, "k", 10, offset)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(registry) == 10
        assert _same_names(registry)
        assert sum(len(p.kpis) for p in registry.perspectives_sorted()) == 40


class TestSnapshot:
    """snapshot() liest alles auf einmal und bleibt danach unverändert."""

    def test_orders_and_indices(self, registry):
        registry.add_kpi("learning", "Training", 100, 10)
        registry.add_kpi("Customer", "NPS", 50, 40)
        registry.add_dependency("learning", "Customer")

        snap = registry.snapshot()

        assert [(p.index, p.name) for p in snap.by_index] == [(0, "learning"), (1, "Customer")]
        assert [p.name for p in snap.by_name] == ["Customer", "learning"]
        assert snap.by_name[0] is snap.by_index[1]
        assert snap.edges == ((0, 1),)

    def test_later_changes_do_not_leak_in(self, standard_registry):
        standard_registry.add_kpi("Customer", "NPS", 50, 40)
        snap = standard_registry.snapshot()

        standard_registry.add_kpi("Customer", "Churn", 10, 5)
        standard_registry.add_dependency("Financial", "Quality")

        customer = snap.by_index[1]
        assert [k.name for k in customer.kpis] == ["NPS"]
        assert len(snap.by_index) == 4
        assert (0, 4) not in snap.edges
        assert len(snap.edges) == 3

    def test_empty_registry(self, registry):
        snap = registry.snapshot()
        assert snap.by_index == () and snap.by_name == () and snap.edges == ()

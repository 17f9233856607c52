"""
balanced_scorecard package

Dieses Paket implementiert eine Balanced Scorecard als Konsolen-Anwendung.
Perspektiven besitzen KPIs (Ziel- und Ist-Wert) und hängen gerichtet voneinander ab.

Schichtenarchitektur:
- config.py: feste Grenzen und Konstanten
- logging_config.py: Logging-Setup
- domain.py: Entitäten + Enums + Fehlerklassen
- name_index.py: Suchbaum über Perspektiven-Namen
- graph.py: Namenstabelle + Abhängigkeiten
- registry.py: Datenhaltung (Baum + Graph synchron)
- service.py: KPI-Aggregation und Abhängigkeits-Analyse
- view.py: ASCII-Ausgabe
- controller.py: Menü-Orchestrierung
- main.py: Einstiegspunkt
"""

from .domain import (
    KPI,
    CapacityExceededError,
    InvalidInputError,
    PerformanceBand,
    Perspective,
    PerspectiveNotFoundError,
    ScorecardError,
)
from .registry import DependencyResult, Registry
from .service import EvaluationState, ScoreEngine

__all__ = [
    "KPI",
    "CapacityExceededError",
    "DependencyResult",
    "EvaluationState",
    "InvalidInputError",
    "PerformanceBand",
    "Perspective",
    "PerspectiveNotFoundError",
    "Registry",
    "ScoreEngine",
    "ScorecardError",
]

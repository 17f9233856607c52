"""
Controller layer

Der ScorecardController steuert die App. Er verbindet Registry, ScoreEngine und View.

Aufgaben:
- Menü anzeigen und Eingaben verarbeiten
- Eingaben prüfen (Zahlen, Bereiche, Namen)
- Änderungen an die Registry geben
- Auswertungen über ScoreEngine berechnen und über die View ausgeben
"""

from __future__ import annotations

import logging
import math
import re
from typing import Optional

from .config import TARGET_MAX, TARGET_MIN
from .domain import ScorecardError
from .registry import DependencyResult, Registry
from .service import ScoreEngine
from .view import ConsoleScorecardView

logger = logging.getLogger(__name__)


class ScorecardController:
    """
    Hauptcontroller für die Scorecard.

    Aufgaben:
    - Menü-Schleife
    - Aufrufe an Registry, Service und View
    """

    def __init__(
        self,
        registry: Registry,
        engine: ScoreEngine,
        view: ConsoleScorecardView
    ) -> None:
        """
        Erstellt den Controller.

        - registry: Datenhaltung
        - engine: KPI-Logik
        - view: Ein-/Ausgabe
        """
        self._registry = registry
        self._engine = engine
        self._view = view

    def starte_app(self) -> None:
        """
        Startet die Menü-Schleife.
        Fehler der Fachlogik werden angezeigt, die Schleife läuft weiter.
        """
        self._view.show_message(
            f"Balanced Scorecard started ({len(self._registry)} perspectives).\n"
        )

        # Endlosschleife bis Abbruch.
        while True:
            self._view.render_menue()
            try:
                choice = self._view.prompt("Enter your choice: ").strip()
            except EOFError:
                self._beenden()
                break

            try:
                if choice == "1":
                    self.erfasse_kpi()
                elif choice == "2":
                    self.zeige_kpis()
                elif choice == "3":
                    self.zeige_scorecard()
                elif choice == "4":
                    self.zeige_abhaengigkeiten()
                elif choice == "5":
                    self.werte_aus()
                elif choice == "6":
                    self.erfasse_abhaengigkeit()
                elif choice == "7":
                    self.zeige_perspektiven()
                elif choice == "0":
                    self._beenden()
                    break
                else:
                    self._view.show_message("Invalid choice. Please select between 0-7.")
            except ScorecardError as e:
                logger.info("Operation rejected: %s", e)
                self._view.show_message(str(e))
            except EOFError:
                self._beenden()
                break

    def erfasse_kpi(self) -> None:
        """
        Erfasst einen KPI.
        Eine unbekannte Perspektive wird automatisch angelegt.
        """
        perspektive = self._view.prompt("\nEnter Perspective name: ").strip()
        if not perspektive:
            self._view.show_message("Perspective name cannot be empty.")
            return

        # Limit vorab prüfen, damit keine Eingaben umsonst sind.
        if self._registry.index_of(perspektive) is None and self._registry.is_full:
            self._view.show_message(f"Cannot add perspective - limit reached ({self._registry.capacity}).")
            return

        kpi_name = self._view.prompt("Enter KPI name: ").strip()
        if not kpi_name:
            self._view.show_message("KPI name cannot be empty.")
            return

        target = self._prompt_zahl(
            "Enter target value: ",
            minimum=TARGET_MIN,
            maximum=TARGET_MAX,
        )
        achieved = self._prompt_zahl("Enter achieved value: ", minimum=0.0)

        self._registry.add_kpi(perspektive, kpi_name, target, achieved)
        gespeichert = self._registry.find(perspektive)
        name = gespeichert.name if gespeichert is not None else perspektive
        self._view.show_message(f"KPI added successfully under {name}.")

    def zeige_kpis(self) -> None:
        """Zeigt alle KPIs (Perspektiven lexikographisch, KPIs neueste zuerst)."""
        self._view.render_kpis(self._engine.list_kpis(self._registry), "ALL KPIs")

    def zeige_scorecard(self) -> None:
        """Zeigt die Performance pro KPI."""
        gruppen = self._engine.list_kpis(self._registry)
        if not gruppen:
            self._view.show_message("No data to generate scorecard.")
            return
        self._view.render_kpis(gruppen, "SCORECARD (per-KPI performance)")

    def zeige_abhaengigkeiten(self) -> None:
        """Zeigt die Abhängigkeiten."""
        self._view.render_dependencies(self._registry.list_dependencies())

    def zeige_perspektiven(self) -> None:
        """Zeigt die Perspektiven nummeriert."""
        self._view.render_perspectives(self._registry.list_perspectives())

    def werte_aus(self) -> None:
        """Berechnet Durchschnitte, Abhängigkeits-Analyse und schwächste Perspektive."""
        state = self._engine.evaluate(self._registry)
        self._view.render_evaluation(state)

    def erfasse_abhaengigkeit(self) -> None:
        """
        Erfasst eine Abhängigkeit A -> B.

        Eingabe je Ende:
        - Zahl: Auswahl einer vorhandenen Perspektive aus der Liste
        - Text: neuer Name (ohne Ziffern)
        """
        self._view.show_message(
            "\nAdd Dependency: A dependency edge A -> B means "
            "'if A performs poorly, it may negatively impact B'."
        )
        self._view.show_message(
            "Example: Learning -> Internal means poor Learning may lead to weaker Internal processes."
        )
        self.zeige_perspektiven()

        if len(self._registry) == 0:
            self._view.show_message(
                "No perspectives exist yet. Add a perspective by adding a KPI with a new perspective name first."
            )
            return

        quelle = self._waehle_perspektive("source perspective (from)")
        if quelle is None:
            return
        ziel = self._waehle_perspektive("destination perspective (to)")
        if ziel is None:
            return

        ergebnis = self._registry.add_dependency(quelle, ziel)
        namen = self._registry.list_perspectives()
        von = namen[self._registry.index_of(quelle)]
        nach = namen[self._registry.index_of(ziel)]

        if ergebnis is DependencyResult.created:
            self._view.show_message(f"Added dependency: {von} -> {nach}")
        else:
            self._view.show_message(f"Dependency already exists: {von} -> {nach}")

    def _waehle_perspektive(self, rolle: str) -> Optional[str]:
        """
        Liest ein Ende der Abhängigkeit.
        - Beginnt die Eingabe mit Ziffern: Nummer aus der Liste, Rest wird ignoriert.
        - Sonst: neuer Name, darf keine Ziffern enthalten.
        - None bei ungültiger Eingabe.
        """
        raw = self._view.prompt(
            f"Enter {rolle}. Type the number shown to pick an existing one, "
            f"or type a NEW name (letters and spaces only): "
        ).strip()
        if not raw:
            self._view.show_message("Name cannot be empty.")
            return None

        namen = self._registry.list_perspectives()
        # Nur die führenden Ziffern zählen ("1a" wählt Nummer 1).
        treffer = re.match(r"\d+", raw)
        if treffer:
            nummer = int(treffer.group())
            if not 1 <= nummer <= len(namen):
                self._view.show_message("Invalid selection number.")
                return None
            return namen[nummer - 1]

        if any(c.isdigit() for c in raw):
            self._view.show_message("Perspective names should not contain digits.")
            return None
        return raw

    def _prompt_zahl(self, frage: str, minimum: float, maximum: Optional[float] = None) -> float:
        """
        Fragt eine Zahl ab, bis die Eingabe gültig ist.
        - Komma und Punkt sind als Dezimaltrenner erlaubt.
        - Bereich wird geprüft.
        """
        while True:
            raw = self._view.prompt(frage).strip()
            try:
                wert = float(raw.replace(",", "."))
            except ValueError:
                self._view.show_message("Invalid input. Please type a numeric value.")
                continue

            if not math.isfinite(wert):
                self._view.show_message("Invalid input. Please type a numeric value.")
                continue

            if wert < minimum or (maximum is not None and wert > maximum):
                if maximum is None:
                    self._view.show_message(f"Value must be >= {minimum:g}.")
                else:
                    self._view.show_message(f"Value must be between {minimum:g} and {maximum:g}.")
                continue

            return wert

    def _beenden(self) -> None:
        """
        Beendet das Programm.
        Die Registry wird freigegeben.
        """
        self._registry.close()
        self._view.show_message("Exiting program...")

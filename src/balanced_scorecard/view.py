"""
UI layer für die Console

Diese View zeigt die Scorecard in der Konsole.
- Text formatieren und ausgeben
- Layout als ASCII-Rahmen bauen
- Eingaben und Menü anzeigen

Farben gibt es nicht. Leistungsbänder werden als Symbole gezeigt.
"""

from __future__ import annotations

import shutil
import textwrap
from typing import List, Sequence, Tuple

from .domain import PerformanceBand
from .service import EvaluationState, KpiZeile, PerspectiveAverage, PerspectiveKpis

MIN_BREITE = 80
BALKEN_LAENGE = 20

BAND_SYMBOLE = {
    PerformanceBand.exceeds: "++",
    PerformanceBand.meets: "✓",
    PerformanceBand.caution: "!",
    PerformanceBand.critical: "X",
}


class ConsoleScorecardView:
    """
    View für die Konsole.

    Die Breite wird automatisch ermittelt anhand der Breite des aktuellen Fensters.
    """

    def __init__(self, width: int | None = None) -> None:
        """
        Erstellt die View.
        - Wenn width None ist, wird die Terminal-Breite genutzt.
        - Nie schmaler als MIN_BREITE, sonst nie breiter als das Terminal.
        """
        spalten = shutil.get_terminal_size(fallback=(140, 24)).columns
        gewuenscht = spalten if width is None else width
        self._width = max(MIN_BREITE, min(gewuenscht, spalten))

    @property
    def width(self) -> int:
        """Gesamtbreite einer Rahmenzeile."""
        return self._width

    def render_menue(self) -> None:
        """Zeigt das Hauptmenü."""
        print()
        print("╔═══════════════════════════════════════╗")
        print("║      BALANCED SCORECARD SYSTEM        ║")
        print("╠═══════════════════════════════════════╣")
        print("║  1) Add KPI                           ║")
        print("║  2) View all KPIs                     ║")
        print("║  3) Generate scorecard                ║")
        print("║  4) Show dependencies                 ║")
        print("║  5) Evaluate performance              ║")
        print("║  6) Add dependency                    ║")
        print("║  7) List perspectives                 ║")
        print("║  0) Exit                              ║")
        print("╚═══════════════════════════════════════╝")

    def prompt(self, frage: str) -> str:
        """
        Fragt den Nutzer nach Eingabe.
        """
        return input(frage)

    def show_message(self, text: str) -> None:
        """
        Gibt eine Nachricht aus.
        """
        print(text)

    def render_kpis(self, gruppen: Sequence[PerspectiveKpis], titel: str = "ALL KPIs") -> None:
        """Zeichnet alle KPIs gruppiert nach Perspektive."""
        print(self.build_kpis(gruppen, titel))

    def render_evaluation(self, state: EvaluationState) -> None:
        """Zeichnet die Auswertung."""
        print(self.build_evaluation(state))

    def render_dependencies(self, abhaengigkeiten: Sequence[Tuple[str, Sequence[str]]]) -> None:
        """Zeichnet die Abhängigkeiten als Adjazenzliste."""
        print(self.build_dependencies(abhaengigkeiten))

    def render_perspectives(self, namen: Sequence[str]) -> None:
        """Zeigt die nummerierte Liste der Perspektiven."""
        print(self.build_perspectives(namen))

    def build_kpis(self, gruppen: Sequence[PerspectiveKpis], titel: str = "ALL KPIs") -> str:
        """
        Baut die KPI-Übersicht als Text.
        Ein Abschnitt pro Perspektive.
        """
        if not gruppen:
            return self._tafel(titel, [["No perspectives / KPIs defined yet."]])

        abschnitte = []
        for g in gruppen:
            texte = [f"Perspective: {g.perspective}"]
            texte.extend(self._kpi_text(k) for k in g.kpis)
            if not g.kpis:
                texte.append("  (No KPIs yet)")
            abschnitte.append(texte)
        return self._tafel(titel, abschnitte)

    def build_evaluation(self, state: EvaluationState) -> str:
        """
        Baut die Auswertung als Text.
        - Durchschnitt pro Perspektive mit Balken
        - Abhängigkeits-Analyse
        - Gesamtwert und schwächste Perspektive
        """
        if not state.has_perspectives:
            return self._tafel("PERFORMANCE EVALUATION", [["No data to evaluate."]])

        durchschnitte = [self._spalten("PERSPECTIVE AVERAGES", "BAND")]
        durchschnitte.extend(self._durchschnitt_zeile(a) for a in state.averages)

        einfluss = ["DEPENDENCY IMPACT ANALYSIS"]
        einfluss.extend(f" X {n.message}" for n in state.impacts)
        if not state.impacts:
            einfluss.append(" No dependency impacts detected.")

        gesamt = "(no data)" if state.overall_average is None else f"{state.overall_average:.2f}%"
        fazit = [f"Overall Performance: {gesamt}"]
        if state.lowest is None:
            fazit.append("No perspective had KPI data to determine lowest performer.")
        else:
            fazit.append(
                f"Lowest Performing Perspective: {state.lowest.perspective} ({state.lowest.average:.2f}%)"
            )

        return self._tafel("PERFORMANCE EVALUATION", [durchschnitte, einfluss, fazit])

    def build_dependencies(self, abhaengigkeiten: Sequence[Tuple[str, Sequence[str]]]) -> str:
        """Baut die Adjazenzliste als Text."""
        lines = ["", "--- Perspective Dependencies ---"]
        if not abhaengigkeiten:
            lines.append("  (no perspectives defined)")
        for name, nachfolger in abhaengigkeiten:
            ziel = ", ".join(nachfolger) if nachfolger else "None"
            lines.append(f"{name} -> {ziel}")
        return "\n".join(lines)

    def build_perspectives(self, namen: Sequence[str]) -> str:
        """Baut die nummerierte Liste der Perspektiven."""
        lines = ["", f"Existing Perspectives (count = {len(namen)}):"]
        if not namen:
            lines.append("  (no perspectives defined)")
        for i, name in enumerate(namen, 1):
            lines.append(f"  {i}. {name}")
        return "\n".join(lines)

    def _tafel(self, titel: str, abschnitte: Sequence[Sequence[str]]) -> str:
        """
        Baut einen Rahmen aus Titel und Abschnitten.
        Abschnitte werden mit ─ getrennt, Titel und Ende mit ═.
        Fertige Rahmenzeilen (beginnen mit │) werden übernommen, sonst wird umgebrochen.
        """
        doppelt = "+" + "═" * (self._width - 2) + "+"
        einfach = "+" + "─" * (self._width - 2) + "+"

        lines = [doppelt, *self._zeilen(titel), doppelt]
        for n, abschnitt in enumerate(abschnitte):
            if n > 0:
                lines.append(einfach)
            for text in abschnitt:
                lines.extend([text] if text.startswith("│") else self._zeilen(text))
        lines.append(doppelt)
        return "\n".join(lines)

    def _zeilen(self, text: str) -> List[str]:
        """Bricht Text auf Rahmenbreite um. Führende Leerzeichen bleiben erhalten."""
        innen = self._width - 2
        teile = textwrap.wrap(
            text,
            width=innen,
            break_long_words=False,
            break_on_hyphens=False,
            replace_whitespace=False,
            drop_whitespace=False,
        ) or [""]
        return ["│" + t[:innen].ljust(innen) + "│" for t in teile]

    def _spalten(self, name: str, band: str) -> str:
        """Zeile mit Perspektive links (zwei Drittel) und Band rechts."""
        innen = self._width - 2
        links = (innen - 3) * 2 // 3
        rechts = innen - 3 - links
        return "│" + name[:links].ljust(links) + " │ " + band[:rechts].ljust(rechts) + "│"

    def _durchschnitt_zeile(self, a: PerspectiveAverage) -> str:
        """Durchschnitt einer Perspektive mit Balken und Band."""
        if a.average is None:
            return self._spalten(f"{a.perspective}: (No KPI data)", "-")
        return self._spalten(
            f"{a.perspective}: {a.average:.2f}% {self._balken(a.average)}",
            f"{BAND_SYMBOLE[a.band]} {a.band.value}",
        )

    def _kpi_text(self, k: KpiZeile) -> str:
        """Eine KPI-Zeile mit Symbol, Ziel, Ist und Performance."""
        return (
            f"  {BAND_SYMBOLE[k.band]:2} {k.name} | Target: {k.target:.2f} | "
            f"Achieved: {k.achieved:.2f} | Performance: {k.performance:.2f}%"
        )

    @staticmethod
    def _balken(prozent: float, laenge: int = BALKEN_LAENGE) -> str:
        """
        Balken für einen Durchschnitt.
        - Werte über 100 % füllen den Balken ganz, negative gar nicht.
        - █ = gefüllt, ░ = leer.
        """
        voll = round(min(max(prozent, 0.0), 100.0) * laenge / 100.0)
        return "[" + "█" * voll + "░" * (laenge - voll) + "]"

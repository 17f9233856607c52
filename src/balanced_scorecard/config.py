"""
Konfiguration und feste Grenzen

Alle Limits der Anwendung stehen hier als Konstanten.
Es gibt keine versteckten Puffergrößen im restlichen Code.

- Kapazität und Namenslänge: Grenzen des Registers
- Schwellwerte: Abhängigkeits-Analyse und Leistungsbänder
- Eingabebereich: nur für die Konsole, nicht für den Kern
- Logging: über Umgebungsvariablen steuerbar
"""

from __future__ import annotations

import os
from typing import Optional, Tuple

# Grenzen des Registers
MAX_PERSPECTIVES: int = 10
MAX_NAME_LENGTH: int = 49

# Abhängigkeits-Analyse
IMPACT_THRESHOLD: float = 80.0

# Leistungsbänder (gelten für KPI und Perspektiven-Durchschnitt)
BAND_EXCEEDS_ABOVE: float = 100.0
BAND_MEETS_FROM: float = 80.0
BAND_CAUTION_FROM: float = 20.0

# Eingabebereich für Zielwerte in der Konsole
TARGET_MIN: float = 1.0
TARGET_MAX: float = 100.0

# Startdaten der Anwendung
DEFAULT_PERSPECTIVES: Tuple[str, ...] = ("Financial", "Customer", "Internal", "Learning")

# Logging
LOG_LEVEL: str = os.getenv("BALANCED_SCORECARD_LOG_LEVEL", "WARNING").upper()
LOG_FILE: Optional[str] = os.getenv("BALANCED_SCORECARD_LOG_FILE") or None

"""
Entry point für die Balanced Scorecard.
Dieses Modul startet die Anwendung.
"""

from __future__ import annotations

import logging
import sys

from .config import DEFAULT_PERSPECTIVES, LOG_FILE, LOG_LEVEL
from .controller import ScorecardController
from .logging_config import setup_logging
from .registry import Registry
from .service import ScoreEngine
from .view import ConsoleScorecardView

logger = logging.getLogger(__name__)


def build_registry() -> Registry:
    """Erstellt die Registry mit den Standard-Perspektiven."""
    registry = Registry()
    for name in DEFAULT_PERSPECTIVES:
        registry.add_perspective_if_absent(name)
    return registry


def main() -> None:
    """
    Startpunkt der Anwendung.
    Ablauf:
    - Logging einrichten
    - Komponenten erstellen
    - Controller starten
    """
    setup_logging(LOG_LEVEL, LOG_FILE)
    registry = None
    try:
        # Bausteine der App erstellen.
        registry = build_registry()
        engine = ScoreEngine()
        view = ConsoleScorecardView()
        controller = ScorecardController(registry, engine, view)

        # App starten.
        controller.starte_app()

    except KeyboardInterrupt:
        # Sauberer Abbruch per Strg+C.
        print("\nExiting program...")
        sys.exit(0)

    except Exception as e:
        # Unerwarteter Fehler.
        logger.exception("Unexpected error")
        print(f"\nERROR: {e}")
        sys.exit(1)

    finally:
        if registry is not None:
            registry.close()


if __name__ == "__main__":
    main()

"""
Logging Configuration
Richtet den Logger für das Paket 'balanced_scorecard' ein.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

LOGGER_NAME = "balanced_scorecard"


def setup_logging(level: Union[int, str] = logging.WARNING, log_file: Optional[str] = None) -> logging.Logger:
    """
    Konfiguriert den Logger für den Namespace 'balanced_scorecard'.

    - level: Log-Level als Zahl oder Name (z.B. "DEBUG")
    - log_file: Optionaler Pfad für eine Log-Datei
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Vorhandene Handler entfernen, sonst doppelte Ausgaben bei Neustart
    if logger.hasHandlers():
        logger.handlers.clear()

    # Konsole (stderr, getrennt von der Menü-Ausgabe auf stdout)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)

    # Format: Zeit - Modul - Level - Nachricht
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Datei (optional)
    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger

# --------------------------------------------------------------
# File: logger.py
# Description: Loggers con salida coloreada en consola para todo el proyecto.
# --------------------------------------------------------------
"""Fábrica de loggers basada en `logging` y `colorama`."""

import logging
import sys

from colorama import Fore, Style, just_fix_windows_console

from core.config import log_level

just_fix_windows_console()

_FORMAT = (
    f"{Style.BRIGHT}%(levelname)-10s "
    + f"{Style.DIM}%(name)-20s "
    + "%(module)s.%(funcName)-25s "
    + f"{Style.RESET_ALL}%(message)s"
)


class ColorFormatter(logging.Formatter):
    """Colorea cada línea según su nivel."""

    COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.MAGENTA,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelno, Fore.WHITE)
        return f"{color}{super().format(record)}{Style.RESET_ALL}"


def get_logger(name: str) -> logging.Logger:
    """Devuelve un logger con un único handler de consola coloreado.

    Args:
        name (str): Nombre del logger, normalmente `__name__`.

    Returns:
        logging.Logger: Logger configurado con el nivel de `LOG_LEVEL`.

    """

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, log_level(), logging.INFO))
    # Cada registro lo escribe solo el handler propio.
    logger.propagate = False
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(ColorFormatter(_FORMAT))
        logger.addHandler(handler)
    return logger

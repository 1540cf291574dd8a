"""
➡️ But : Configurer loguru une seule fois pour toute l'application.

setup_logging() : remplace le sink par défaut par une sortie console colorée
et, si LOG_TO_FILE, des fichiers tournants (tous les logs + erreurs seules).

Ailleurs on importe simplement :

from app.core.logger import logger
logger.info("...")
"""

import os
import sys

from loguru import logger

from app.core.config import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logging() -> None:
    # Supprime le logger par défaut
    logger.remove()

    logger.add(
        sys.stdout,
        colorize=True,
        format=CONSOLE_FORMAT,
        level=settings.LOG_LEVEL,
    )

    if not settings.LOG_TO_FILE:
        return

    os.makedirs(settings.LOG_DIR, exist_ok=True)

    # Fichier (tous les logs)
    logger.add(
        os.path.join(settings.LOG_DIR, "bingo.log"),
        rotation="10 MB",
        retention="30 days",
        compression="zip",
        format=FILE_FORMAT,
        level="DEBUG",
    )

    # Fichier erreurs seules
    logger.add(
        os.path.join(settings.LOG_DIR, "error.log"),
        rotation="10 MB",
        retention="30 days",
        compression="zip",
        format=FILE_FORMAT,
        level="ERROR",
    )


__all__ = ["logger", "setup_logging"]

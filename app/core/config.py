"""
➡️ But : Centraliser tous les paramètres configurables (nom d’app, chemin DB, bornes de grille, timeouts, logs…)

Utilise pydantic-settings pour charger automatiquement les variables d’environnement (.env, variables système…).

Fournit un objet settings unique, que tu importes ailleurs :

from app.core.config import settings
print(settings.APP_NAME)


🔹 Avantages :

Plus propre que des constantes éparpillées dans le code.

Facilite le passage entre environnements (dev / prod / test).
"""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # -----------------------------
    # App
    # -----------------------------
    APP_NAME: str = "Bingo-Back"
    ENV: str = "dev"  # dev | prod | test

    # -----------------------------
    # DB
    # -----------------------------
    SQLITE_PATH: str = "bingo.db"  # fichier SQLite
    # Si tu veux forcer une URL différente (ex: Postgres), définis DATABASE_URL dans l'env.
    DATABASE_URL: Optional[str] = None
    SQLITE_BUSY_TIMEOUT_MS: int = 5000

    # -----------------------------
    # Règles du jeu
    # -----------------------------
    GRID_SIZE_MIN: int = 2
    GRID_SIZE_MAX: int = 10
    # nombre max de tirages aléatoires par grille pendant la phase de remplissage
    DISTRIBUTION_MAX_DRAWS: int = 10_000

    # -----------------------------
    # Commandes
    # -----------------------------
    COMMAND_TIMEOUT_SECONDS: float = 5.0

    # -----------------------------
    # Logs
    # -----------------------------
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_TO_FILE: bool = False

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    # -----------------------------
    # Post-process values
    # -----------------------------
    def model_post_init(self, __context): # appelée automatiquement
        # DATABASE_URL par défaut depuis SQLITE_PATH si non fourni
        if not self.DATABASE_URL:
            object.__setattr__(self, "DATABASE_URL", f"sqlite:///{self.SQLITE_PATH}")

        # en prod on écrit aussi les logs sur disque
        if self.ENV == "prod" and not self.LOG_TO_FILE:
            object.__setattr__(self, "LOG_TO_FILE", True)


# Instance globale importable partout
settings = Settings()

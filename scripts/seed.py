"""
➡️ But : créer une partie de démo à partir d'un fichier YAML.

Usage : python -m scripts.seed [chemin.yaml]
"""

import sys

import yaml

from app.core.logger import logger, setup_logging
from app.db.session import engine, Session, init_db

from app.db.repositories.games import GameRepository
from app.db.repositories.events import EventRepository
from app.db.repositories.boards import BoardRepository
from app.db.repositories.squares import SquareRepository

from app.features.games.schemas import GameCreateIn
from app.features.games.services import GameService

DEFAULT_SEED_PATH = "scripts/demo_game.yaml"


def load_game_payload(path: str) -> GameCreateIn:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return GameCreateIn(**data)


def run_seed(path: str = DEFAULT_SEED_PATH) -> None:
    setup_logging()
    init_db()
    payload = load_game_payload(path)
    with Session(engine) as session:
        svc = GameService(
            session=session,
            game_repo=GameRepository(session),
            event_repo=EventRepository(session),
            board_repo=BoardRepository(session),
            square_repo=SquareRepository(session),
        )
        game = svc.create_game(payload)
    logger.info(f"Seeded game {game['id']} ({game['title']})")


if __name__ == "__main__":
    run_seed(sys.argv[1] if len(sys.argv) > 1 else DEFAULT_SEED_PATH)

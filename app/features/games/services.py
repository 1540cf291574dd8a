import random
from typing import Any, Dict, List, Optional
from sqlmodel import Session

from app.core.config import settings
from app.core.errors import (
    GridSizeError,
    InsufficientEventsError,
    NoActiveGameError,
    NotFoundError,
    UnknownGameError,
    ValidationError,
)
from app.core.logger import logger
from app.db.models.games import Game
from app.db.repositories.games import GameRepository
from app.db.repositories.events import EventRepository
from app.db.repositories.boards import BoardRepository
from app.db.repositories.squares import SquareRepository
from app.db.transaction import unit_of_work

from app.features.games.distribution import distribute
from app.features.games.schemas import GameCreateIn

class GameService:
    """
    Cycle de vie d'une partie : création, partie active, suppression en cascade.

    - create_game : partie + événements + grilles + cases dans une seule transaction
    - set_active_game : échange atomique du flag is_active
    - delete_game : cascade, puis réélection de la partie active (plus petit id restant)
    """
    def __init__(
        self,
        session: Session,
        game_repo: GameRepository,
        event_repo: EventRepository,
        board_repo: BoardRepository,
        square_repo: SquareRepository,
        *,
        rng: Optional[random.Random] = None,
        timeout: Optional[float] = None,
    ):
        self.session = session

        self.games = game_repo
        self.events = event_repo
        self.boards = board_repo
        self.squares = square_repo

        self.rng = rng or random.Random()
        self.timeout = timeout

    # -----------------------------------
    # Helpers
    # -----------------------------------
    def get_game(self, game_id: int) -> Game:
        game = self.games.get(game_id)
        if not game:
            raise NotFoundError(f"Game {game_id} not found", code="GAME_NOT_FOUND")
        return game

    def get_active_game(self) -> Optional[Game]:
        return self.games.get_active()

    def resolve_game(self, game_id: Optional[int] = None) -> Game:
        """La partie demandée, sinon la partie active."""
        if game_id is not None:
            return self.get_game(game_id)
        game = self.games.get_active()
        if not game:
            raise NoActiveGameError()
        return game

    @staticmethod
    def _validate(payload: GameCreateIn) -> None:
        size = payload.grid_size
        if not settings.GRID_SIZE_MIN <= size <= settings.GRID_SIZE_MAX:
            raise GridSizeError(
                f"Grid size must be between {settings.GRID_SIZE_MIN} and {settings.GRID_SIZE_MAX}"
            )
        if not payload.player_ids:
            raise ValidationError("At least one player is required", code="NO_PLAYERS")
        if len(set(payload.player_ids)) != len(payload.player_ids):
            raise ValidationError("Duplicate player ids", code="DUPLICATE_PLAYERS")

        required = size * size
        if len(payload.events) < required:
            raise InsufficientEventsError(required=required, provided=len(payload.events))

    # ---------------------------------------------------------------------
    # Create game
    # ---------------------------------------------------------------------

    def create_game(self, payload: GameCreateIn) -> Dict[str, Any]:
        self._validate(payload)

        with unit_of_work(self.session, timeout=self.timeout):
            game = self.games.create(
                commit=False,
                title=payload.title,
                grid_size=payload.grid_size,
                is_active=False,
            )

            # 1re partie (ou plus aucune active) : elle devient active
            if not self.games.get_active():
                self.games.set_active(game.id)

            events = self.events.bulk_create_for_game(game.id, payload.events, commit=False)

            assignment = distribute(
                [e.id for e in events],
                payload.player_ids,
                payload.grid_size,
                rng=self.rng,
                max_draws=settings.DISTRIBUTION_MAX_DRAWS,
            )

            for user_id in payload.player_ids:
                board = self.boards.create(
                    commit=False,
                    game_id=game.id,
                    user_id=user_id,
                    grid_size=payload.grid_size,
                )
                self.squares.bulk_create_for_board(board.id, assignment[user_id], commit=False)

        self.session.refresh(game)
        logger.info(
            f"Game {game.id} '{game.title}' created: {payload.grid_size}x{payload.grid_size}, "
            f"{len(payload.player_ids)} players, {len(events)} events, active={game.is_active}"
        )
        return {
            "id": game.id,
            "title": game.title,
            "grid_size": game.grid_size,
            "is_active": game.is_active,
            "event_count": len(events),
            "player_ids": list(payload.player_ids),
        }

    # ---------------------------------------------------------------------
    # Active game
    # ---------------------------------------------------------------------

    def set_active_game(self, game_id: int) -> Game:
        game = self.get_game(game_id)
        with unit_of_work(self.session, timeout=self.timeout):
            self.games.set_active(game.id)
        self.session.refresh(game)
        logger.info(f"Game {game.id} is now the active game")
        return game

    # ---------------------------------------------------------------------
    # Delete (cascade)
    # ---------------------------------------------------------------------

    def delete_game(self, game_id: int) -> Dict[str, Any]:
        game = self.games.get(game_id)
        if not game:
            raise UnknownGameError(f"Game {game_id} does not exist, nothing to delete")
        was_active = game.is_active

        with unit_of_work(self.session, timeout=self.timeout):
            self.games.delete_cascade(game_id)

            replacement = None
            if was_active:
                replacement = self.games.get_lowest_id()
                if replacement:
                    self.games.set_active(replacement.id)

        active = self.games.get_active()
        logger.info(
            f"Game {game_id} deleted (was_active={was_active}), "
            f"active game is now {active.id if active else None}"
        )
        return {"deleted_id": game_id, "active_game_id": active.id if active else None}

    # ---------------------------------------------------------------------
    # Listing
    # ---------------------------------------------------------------------

    def list_games(self) -> List[Dict[str, Any]]:
        return [
            {
                "id": r.id,
                "title": r.title,
                "grid_size": r.grid_size,
                "is_active": bool(r.is_active),
                "player_count": int(r.player_count),
                "event_count": int(r.event_count),
                "closed_count": int(r.closed_count),
            }
            for r in self.games.list_with_stats()
        ]

from typing import Any, Dict, List, Optional
from sqlmodel import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.core.errors import (
    DuplicateVoteError,
    EventAlreadyResolvedError,
    NotFoundError,
    ValidationError,
)
from app.core.logger import logger
from app.db.models.events import Event, EventStatus
from app.db.models.games import Game
from app.db.repositories.events import EventRepository
from app.db.repositories.boards import BoardRepository
from app.db.repositories.votes import VoteRepository
from app.db.transaction import unit_of_work

from app.features.boards.win_detection import build_grid, has_win
from app.features.games.services import GameService
from app.features.votes.consensus import required_votes
from app.features.votes.schemas import VoteIn

class VoteService:
    """
    Coordination d'un vote :
    1) retrouve l'événement par display_id
    2) refuse si déjà résolu / si le joueur a déjà voté
    3) enregistre le vote, recompte, compare au seuil (joueurs vivants)
    4) seuil atteint -> OPEN -> CLOSED (UPDATE conditionnel), dans la même transaction
    5) après commit : scan complet de toutes les grilles pour trouver les gagnants
    """
    def __init__(
        self,
        session: Session,
        game_svc: GameService,
        event_repo: EventRepository,
        board_repo: BoardRepository,
        vote_repo: VoteRepository,
        *,
        timeout: Optional[float] = None,
    ):
        self.session = session
        self.game_svc = game_svc

        self.events = event_repo
        self.boards = board_repo
        self.votes = vote_repo

        self.timeout = timeout

    def _get_event(self, game: Game, display_id: int) -> Event:
        event = self.events.get_by_display_id(game.id, display_id)
        if not event:
            raise NotFoundError(
                f"Event #{display_id} not found in game {game.id}", code="EVENT_NOT_FOUND"
            )
        return event

    # ---------------------------------------------------------------------
    # Submit vote
    # ---------------------------------------------------------------------

    def submit_vote(self, payload: VoteIn) -> Dict[str, Any]:
        game = self.game_svc.resolve_game(payload.game_id)
        event = self._get_event(game, payload.display_id)

        # un flush en échec expire l'instance : on garde ce qu'il faut pour les messages
        event_id, display_id = event.id, event.display_id

        if event.status == EventStatus.CLOSED:
            raise EventAlreadyResolvedError(f"Event #{display_id} is already resolved")
        if self.votes.has_voted(event_id, payload.voter_id):
            raise DuplicateVoteError(f"You already voted for event #{display_id}")

        with unit_of_work(self.session, timeout=self.timeout):
            try:
                self.votes.create(commit=False, event_id=event_id, user_id=payload.voter_id)
            except IntegrityError as exc:
                # course entre deux requêtes du même joueur : la contrainte unique tranche
                raise DuplicateVoteError(
                    f"You already voted for event #{display_id}"
                ) from exc

            # l'insert tient le verrou d'écriture : le statut relu ici ne bougera plus
            self.session.refresh(event)
            if event.status == EventStatus.CLOSED:
                raise EventAlreadyResolvedError(f"Event #{display_id} is already resolved")

            count = self.votes.count_for_event(event_id)
            player_count = self.boards.count_for_game(game.id)
            if player_count <= 0:
                raise ValidationError(f"Game {game.id} has no boards", code="GAME_HAS_NO_PLAYERS")
            required = required_votes(player_count)

            resolved_now = False
            if count >= required:
                resolved_now = self.events.close_if_open(event)

        logger.info(
            f"Vote game={game.id} event=#{display_id} voter={payload.voter_id}: "
            f"{count}/{required}{' -> CLOSED' if resolved_now else ''}"
        )

        result: Dict[str, Any] = {
            "game_id": game.id,
            "display_id": display_id,
            "description": event.description,
            "votes": count,
            "required": required,
            "closed": resolved_now,
            "winners": [],
            "detection_error": None,
        }

        if resolved_now:
            # lecture seule, après commit : un échec ici n'annule pas la résolution
            try:
                result["winners"] = self.find_winners(game.id)
            except SQLAlchemyError as exc:
                logger.exception(f"Winner detection failed for game {game.id}")
                result["detection_error"] = type(exc).__name__
            if result["winners"]:
                logger.info(f"Bingo in game {game.id} for players {result['winners']}")

        return result

    # ---------------------------------------------------------------------
    # Détection des gagnants
    # ---------------------------------------------------------------------

    def find_winners(self, game_id: int) -> List[int]:
        """Rescanne toutes les grilles de la partie (pas d'état incrémental)."""
        by_board: Dict[int, Dict[str, Any]] = {}
        for r in self.boards.list_squares_for_game(game_id):
            entry = by_board.setdefault(
                r.board_id, {"user_id": r.user_id, "grid_size": r.grid_size, "cells": []}
            )
            entry["cells"].append((r.row, r.column, r.status == EventStatus.CLOSED))

        winners = []
        for entry in by_board.values():
            grid = build_grid(entry["cells"], entry["grid_size"])
            if has_win(grid, entry["grid_size"]):
                winners.append(entry["user_id"])
        return winners

    # ---------------------------------------------------------------------
    # Votants d'un événement
    # ---------------------------------------------------------------------

    def list_voters(self, game_id: Optional[int], display_id: int) -> Dict[str, Any]:
        game = self.game_svc.resolve_game(game_id)
        event = self._get_event(game, display_id)
        return {
            "game_id": game.id,
            "display_id": display_id,
            "voter_ids": self.votes.list_voter_ids(event.id),
        }

from typing import Any, Optional, Sequence

from sqlmodel import select
from sqlalchemy import case, func, update, delete

from app.db.repositories.base import BaseRepository

from app.db.models.games import Game
from app.db.models.events import Event, EventStatus
from app.db.models.boards import Board
from app.db.models.squares import Square
from app.db.models.votes import Vote

class GameRepository(BaseRepository[Game]):
    model = Game

    def get_active(self) -> Optional[Game]:
        stmt = select(Game).where(Game.is_active.is_(True))
        return self.session.exec(stmt).first()

    def list_all(self) -> Sequence[Game]:
        stmt = select(Game).order_by(Game.id.desc())
        return self.session.exec(stmt).all()

    def get_lowest_id(self) -> Optional[Game]:
        stmt = select(Game).order_by(Game.id.asc()).limit(1)
        return self.session.exec(stmt).first()

    def list_with_stats(self) -> Sequence[Any]:
        """
        Lignes "plates" : Game + nb joueurs + nb événements + nb événements résolus.
        Plus récentes en premier.
        """
        players = (
            select(Board.game_id, func.count(Board.id).label("player_count"))
            .group_by(Board.game_id)
            .subquery()
        )
        events = (
            select(
                Event.game_id,
                func.count(Event.id).label("event_count"),
                func.sum(case((Event.status == EventStatus.CLOSED, 1), else_=0)).label("closed_count"),
            )
            .group_by(Event.game_id)
            .subquery()
        )
        stmt = (
            select(
                Game.id,
                Game.title,
                Game.grid_size,
                Game.is_active,
                func.coalesce(players.c.player_count, 0).label("player_count"),
                func.coalesce(events.c.event_count, 0).label("event_count"),
                func.coalesce(events.c.closed_count, 0).label("closed_count"),
            )
            .join(players, players.c.game_id == Game.id, isouter=True)
            .join(events, events.c.game_id == Game.id, isouter=True)
            .order_by(Game.id.desc())
        )
        return self.session.exec(stmt).all()

    # ---------- Partie active ----------

    def set_active(self, game_id: int) -> None:
        """
        Échange atomique (dans la transaction en cours) :
        on retire le flag de la partie active (y compris elle-même), puis on le pose sur game_id.
        Seul point d'écriture de is_active.
        """
        self.session.execute(
            update(Game).where(Game.is_active.is_(True)).values(is_active=False)
        )
        self.session.execute(
            update(Game).where(Game.id == game_id).values(is_active=True)
        )
        self.session.flush()

    # ---------- Suppression en cascade ----------

    def delete_cascade(self, game_id: int) -> None:
        """
        Supprime dans l'ordre des dépendances :
        cases -> grilles -> votes -> événements -> partie.
        Ne commit pas : à appeler dans une unité de travail.
        """
        board_ids = select(Board.id).where(Board.game_id == game_id)
        event_ids = select(Event.id).where(Event.game_id == game_id)

        self.session.execute(delete(Square).where(Square.board_id.in_(board_ids)))
        self.session.execute(delete(Board).where(Board.game_id == game_id))
        self.session.execute(delete(Vote).where(Vote.event_id.in_(event_ids)))
        self.session.execute(delete(Event).where(Event.game_id == game_id))
        self.session.execute(delete(Game).where(Game.id == game_id))
        self.session.flush()

from typing import Any, List, Optional, Sequence, Tuple

from sqlmodel import select
from sqlalchemy import func

from app.db.repositories.base import BaseRepository

from app.db.models.boards import Board
from app.db.models.squares import Square
from app.db.models.events import Event

class BoardRepository(BaseRepository[Board]):
    model = Board

    def get_by_game_and_user(self, game_id: int, user_id: int) -> Optional[Board]:
        stmt = select(Board).where(Board.game_id == game_id, Board.user_id == user_id)
        return self.session.exec(stmt).first()

    def count_for_game(self, game_id: int) -> int:
        stmt = select(func.count(Board.id)).where(Board.game_id == game_id)
        return int(self.session.exec(stmt).one())

    def list_player_ids_for_game(self, game_id: int) -> List[int]:
        stmt = select(Board.user_id).where(Board.game_id == game_id).order_by(Board.id.asc())
        return list(self.session.exec(stmt).all())

    def get_with_squares(self, game_id: int, user_id: int) -> Tuple[Optional[Board], Sequence[Any]]:
        """
        Grille d'un joueur + ses cases jointes à l'événement (display_id, description, statut),
        triées ligne par ligne. (None, []) si le joueur n'a pas de grille dans la partie.
        """
        board = self.get_by_game_and_user(game_id, user_id)
        if not board:
            return None, []
        return board, self.list_squares_with_events(board.id)

    def list_squares_with_events(self, board_id: int) -> Sequence[Any]:
        stmt = (
            select(
                Square.row,
                Square.column,
                Square.event_id,
                Event.display_id,
                Event.description,
                Event.status,
            )
            .join(Event, Event.id == Square.event_id)
            .where(Square.board_id == board_id)
            .order_by(Square.row.asc(), Square.column.asc())
        )
        return self.session.exec(stmt).all()

    def list_squares_for_game(self, game_id: int) -> Sequence[Any]:
        """
        Toutes les cases de toutes les grilles d'une partie (user_id, taille, ligne, colonne, statut),
        en une seule requête pour la détection de victoire.
        """
        stmt = (
            select(
                Board.id.label("board_id"),
                Board.user_id,
                Board.grid_size,
                Square.row,
                Square.column,
                Event.status,
            )
            .join(Square, Square.board_id == Board.id)
            .join(Event, Event.id == Square.event_id)
            .where(Board.game_id == game_id)
            .order_by(Board.id.asc(), Square.row.asc(), Square.column.asc())
        )
        return self.session.exec(stmt).all()

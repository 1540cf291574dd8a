from typing import Any, Dict, Optional

from app.core.errors import NotFoundError
from app.db.models.events import EventStatus
from app.db.repositories.boards import BoardRepository
from app.features.boards.win_detection import build_grid, has_win
from app.features.games.services import GameService

class BoardService:
    def __init__(self, game_svc: GameService, board_repo: BoardRepository):
        self.game_svc = game_svc
        self.boards = board_repo

    def get_board(self, user_id: int, game_id: Optional[int] = None) -> Dict[str, Any]:
        """
        Grille d'un joueur, cases triées ligne par ligne, avec l'indicateur de victoire.
        (le rendu en image reste à la charge de la couche de commandes)
        """
        game = self.game_svc.resolve_game(game_id)
        board, rows = self.boards.get_with_squares(game.id, user_id)
        if not board:
            raise NotFoundError(
                f"Player {user_id} has no board in game {game.id}", code="BOARD_NOT_FOUND"
            )

        grid = build_grid(
            ((r.row, r.column, r.status == EventStatus.CLOSED) for r in rows),
            board.grid_size,
        )
        return {
            "game_id": game.id,
            "user_id": board.user_id,
            "grid_size": board.grid_size,
            "squares": [
                {
                    "row": r.row,
                    "column": r.column,
                    "display_id": r.display_id,
                    "description": r.description,
                    "status": r.status,
                }
                for r in rows
            ],
            "has_win": has_win(grid, board.grid_size),
        }

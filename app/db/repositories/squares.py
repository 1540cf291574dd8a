from typing import Iterable, List, Tuple

from app.db.repositories.base import BaseRepository

from app.db.models.squares import Square

class SquareRepository(BaseRepository[Square]):
    model = Square

    def bulk_create_for_board(
        self,
        board_id: int,
        cells: Iterable[Tuple[int, int, int]],
        *,
        commit: bool = True,
    ) -> List[Square]:
        """cells : (row, column, event_id)"""
        return self.bulk_create(
            (
                {"board_id": board_id, "row": row, "column": column, "event_id": event_id}
                for row, column, event_id in cells
            ),
            commit=commit,
        )

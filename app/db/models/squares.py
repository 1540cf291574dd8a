from sqlmodel import Field
from sqlalchemy import UniqueConstraint

from app.db.models.base import BaseModelDB


class Square(BaseModelDB, table=True):
    __table_args__ = (
        UniqueConstraint("board_id", "row", "column", name="uq_squares_board_cell"),
        UniqueConstraint("board_id", "event_id", name="uq_squares_board_event"),
    )

    board_id: int = Field(foreign_key="board.id", index=True)
    event_id: int = Field(foreign_key="event.id", index=True)

    row: int = Field(nullable=False)
    column: int = Field(nullable=False)

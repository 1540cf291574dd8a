from typing import List
from pydantic import BaseModel

from app.db.models.events import EventStatus


class SquareOut(BaseModel):
    row: int
    column: int
    display_id: int
    description: str
    status: EventStatus


class BoardOut(BaseModel):
    game_id: int
    user_id: int
    grid_size: int
    squares: List[SquareOut]
    has_win: bool

from typing import List
from pydantic import BaseModel

from app.db.models.events import EventStatus


class EventOut(BaseModel):
    display_id: int
    description: str
    status: EventStatus
    votes: int


class EventListOut(BaseModel):
    game_id: int
    title: str
    open_count: int
    closed_count: int
    events: List[EventOut]

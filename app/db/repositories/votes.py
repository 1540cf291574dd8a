from typing import List

from sqlmodel import select
from sqlalchemy import func

from app.db.repositories.base import BaseRepository

from app.db.models.votes import Vote

class VoteRepository(BaseRepository[Vote]):
    model = Vote

    def count_for_event(self, event_id: int) -> int:
        stmt = select(func.count(Vote.id)).where(Vote.event_id == event_id)
        return int(self.session.exec(stmt).one())

    def has_voted(self, event_id: int, user_id: int) -> bool:
        stmt = select(func.count(Vote.id)).where(Vote.event_id == event_id, Vote.user_id == user_id)
        return int(self.session.exec(stmt).one()) > 0

    def list_voter_ids(self, event_id: int) -> List[int]:
        stmt = (
            select(Vote.user_id)
            .where(Vote.event_id == event_id)
            .order_by(Vote.voted_at.asc(), Vote.id.asc())
        )
        return list(self.session.exec(stmt).all())

from datetime import datetime

from sqlmodel import Field
from sqlalchemy import BigInteger, UniqueConstraint

from app.db.models.base import BaseModelDB, utcnow


class Vote(BaseModelDB, table=True):
    __table_args__ = (
        # un joueur vote au plus une fois par événement
        UniqueConstraint("event_id", "user_id", name="uq_votes_event_user"),
    )

    event_id: int = Field(foreign_key="event.id", index=True)
    user_id: int = Field(sa_type=BigInteger, nullable=False, index=True)

    voted_at: datetime = Field(default_factory=utcnow)

import enum

from sqlmodel import Field
from sqlalchemy import Column, Enum as SQLEnum, UniqueConstraint

from app.core.errors import InvalidTransitionError
from app.db.models.base import BaseModelDB


class EventStatus(str, enum.Enum):
    """Statut d'un événement : OPEN -> CLOSED, jamais l'inverse."""
    OPEN = "OPEN"
    CLOSED = "CLOSED"

    def can_transition_to(self, target: "EventStatus") -> bool:
        return self is EventStatus.OPEN and target is EventStatus.CLOSED

    def transition_to(self, target: "EventStatus") -> "EventStatus":
        if not self.can_transition_to(target):
            raise InvalidTransitionError(f"Cannot move event from {self.value} to {target.value}")
        return target


class Event(BaseModelDB, table=True):
    __table_args__ = (
        UniqueConstraint("game_id", "display_id", name="uq_events_game_display_id"),
    )

    game_id: int = Field(foreign_key="game.id", index=True)

    # numéro affiché aux joueurs (1..n), stable pour toute la partie
    display_id: int = Field(nullable=False)
    description: str = Field(nullable=False)

    status: EventStatus = Field(
        default=EventStatus.OPEN,
        sa_column=Column(SQLEnum(EventStatus, name="event_status"), nullable=False),
    )

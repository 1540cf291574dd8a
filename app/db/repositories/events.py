from typing import Any, List, Optional, Sequence

from sqlmodel import select
from sqlalchemy import func, update

from app.db.repositories.base import BaseRepository

from app.db.models.events import Event, EventStatus
from app.db.models.votes import Vote

class EventRepository(BaseRepository[Event]):
    model = Event

    def bulk_create_for_game(self, game_id: int, descriptions: Sequence[str], *, commit: bool = True) -> List[Event]:
        """Crée les événements d'une partie avec des display_id séquentiels à partir de 1."""
        return self.bulk_create(
            (
                {
                    "game_id": game_id,
                    "display_id": index,
                    "description": description,
                    "status": EventStatus.OPEN,
                }
                for index, description in enumerate(descriptions, start=1)
            ),
            commit=commit,
        )

    def get_by_display_id(self, game_id: int, display_id: int) -> Optional[Event]:
        stmt = select(Event).where(Event.game_id == game_id, Event.display_id == display_id)
        return self.session.exec(stmt).first()

    def list_for_game(self, game_id: int) -> Sequence[Event]:
        stmt = select(Event).where(Event.game_id == game_id).order_by(Event.display_id.asc())
        return self.session.exec(stmt).all()

    def list_for_game_with_vote_counts(self, game_id: int) -> Sequence[Any]:
        """Lignes plates (Event + nb de votes), par display_id."""
        stmt = (
            select(
                Event.id,
                Event.display_id,
                Event.description,
                Event.status,
                func.count(Vote.id).label("vote_count"),
            )
            .join(Vote, Vote.event_id == Event.id, isouter=True)
            .where(Event.game_id == game_id)
            .group_by(Event.id, Event.display_id, Event.description, Event.status)
            .order_by(Event.display_id.asc())
        )
        return self.session.exec(stmt).all()

    def update_status(self, event: Event, target: EventStatus) -> bool:
        """
        Transition gardée : l'UPDATE ne touche la ligne que si le statut courant
        est encore celui attendu. Retourne True si cet appel a fait la transition.
        Ne commit pas.
        """
        current = EventStatus(event.status)
        current.transition_to(target)

        result = self.session.execute(
            update(Event)
            .where(Event.id == event.id, Event.status == current)
            .values(status=target)
            .execution_options(synchronize_session=False)
        )
        self.session.flush()
        changed = result.rowcount == 1
        # l'objet en mémoire reflète l'état en base, quel que soit le gagnant
        self.session.refresh(event)
        return changed

    def close_if_open(self, event: Event) -> bool:
        return self.update_status(event, EventStatus.CLOSED)

    def count_by_status(self, game_id: int, status: EventStatus) -> int:
        stmt = select(func.count(Event.id)).where(Event.game_id == game_id, Event.status == status)
        return int(self.session.exec(stmt).one())

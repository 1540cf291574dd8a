from typing import Any, Dict, Optional

from app.db.models.events import EventStatus
from app.db.repositories.events import EventRepository
from app.features.games.services import GameService

class EventService:
    """Lecture des événements d'une partie (statut + nombre de votes)."""

    def __init__(self, game_svc: GameService, event_repo: EventRepository):
        self.game_svc = game_svc
        self.events = event_repo

    def list_events(self, game_id: Optional[int] = None) -> Dict[str, Any]:
        game = self.game_svc.resolve_game(game_id)
        rows = self.events.list_for_game_with_vote_counts(game.id)
        return {
            "game_id": game.id,
            "title": game.title,
            "open_count": self.events.count_by_status(game.id, EventStatus.OPEN),
            "closed_count": self.events.count_by_status(game.id, EventStatus.CLOSED),
            "events": [
                {
                    "display_id": r.display_id,
                    "description": r.description,
                    "status": r.status,
                    "votes": int(r.vote_count),
                }
                for r in rows
            ],
        }

from fastapi import APIRouter, Depends, Path

from app.api.v1.dependencies import get_event_service, get_vote_service, to_http_error
from app.core.errors import BingoError
from app.features.events.schemas import EventListOut
from app.features.events.services import EventService
from app.features.votes.schemas import EventVotersOut
from app.features.votes.services import VoteService


router = APIRouter(
    tags=["events"],
    responses={404: {"description": "Not Found"}},
)

@router.get(
    "/events",
    summary="Événements de la partie active (statut + votes)",
    response_model=EventListOut,
)
def list_active_game_events(
    svc: EventService = Depends(get_event_service),
):
    try:
        return svc.list_events()
    except BingoError as e:
        raise to_http_error(e)

@router.get(
    "/games/{game_id}/events",
    summary="Événements d'une partie (statut + votes)",
    response_model=EventListOut,
)
def list_game_events(
    game_id: int = Path(..., ge=1),
    svc: EventService = Depends(get_event_service),
):
    try:
        return svc.list_events(game_id)
    except BingoError as e:
        raise to_http_error(e)

@router.get(
    "/games/{game_id}/events/{display_id}/votes",
    summary="Joueurs ayant voté pour un événement",
    response_model=EventVotersOut,
)
def list_event_voters(
    game_id: int = Path(..., ge=1),
    display_id: int = Path(..., ge=1),
    svc: VoteService = Depends(get_vote_service),
):
    try:
        return svc.list_voters(game_id, display_id)
    except BingoError as e:
        raise to_http_error(e)

from typing import List

from fastapi import APIRouter, Depends, Path, status

from app.api.v1.dependencies import get_game_service, to_http_error
from app.core.errors import BingoError
from app.features.games.schemas import (
    ActiveGameOut,
    GameCreateIn,
    GameCreateOut,
    GameDeleteOut,
    GameOut,
    GameSummaryOut,
)
from app.features.games.services import GameService


router = APIRouter(
    prefix="/games",
    tags=["games"],
    responses={404: {"description": "Not Found"}},
)

# -----------------------------
# List
# -----------------------------
@router.get(
    "",
    summary="Lister les parties avec leurs statistiques",
    response_model=List[GameSummaryOut],
)
def list_games(
    svc: GameService = Depends(get_game_service),
):
    return svc.list_games()

# -----------------------------
# Create game
# -----------------------------
@router.post(
    "",
    summary="Créer une partie complète (événements + grilles des joueurs)",
    status_code=status.HTTP_201_CREATED,
    response_model=GameCreateOut,
    responses={400: {"description": "Invalid setup"}},
)
def create_game(
    payload: GameCreateIn,
    svc: GameService = Depends(get_game_service),
):
    try:
        return svc.create_game(payload)
    except BingoError as e:
        raise to_http_error(e)

# -----------------------------
# Active game
# -----------------------------
@router.get(
    "/active",
    summary="Partie active (ou null)",
    response_model=ActiveGameOut,
)
def get_active_game(
    svc: GameService = Depends(get_game_service),
):
    return {"active_game": svc.get_active_game()}

@router.put(
    "/{game_id}/active",
    summary="Définir la partie active",
    response_model=GameOut,
)
def set_active_game(
    game_id: int = Path(..., ge=1),
    svc: GameService = Depends(get_game_service),
):
    try:
        return svc.set_active_game(game_id)
    except BingoError as e:
        raise to_http_error(e)

# -----------------------------
# Delete (cascade)
# -----------------------------
@router.delete(
    "/{game_id}",
    summary="Supprimer une partie et toutes ses données",
    response_model=GameDeleteOut,
    responses={409: {"description": "Unknown game, nothing deleted"}},
)
def delete_game(
    game_id: int = Path(..., ge=1),
    svc: GameService = Depends(get_game_service),
):
    try:
        return svc.delete_game(game_id)
    except BingoError as e:
        raise to_http_error(e)

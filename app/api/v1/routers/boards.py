from fastapi import APIRouter, Depends, Path

from app.api.v1.dependencies import get_board_service, to_http_error
from app.core.errors import BingoError
from app.features.boards.schemas import BoardOut
from app.features.boards.services import BoardService


router = APIRouter(
    tags=["boards"],
    responses={404: {"description": "Not Found"}},
)

@router.get(
    "/boards/{user_id}",
    summary="Grille d'un joueur dans la partie active",
    response_model=BoardOut,
)
def get_active_game_board(
    user_id: int = Path(...),
    svc: BoardService = Depends(get_board_service),
):
    try:
        return svc.get_board(user_id)
    except BingoError as e:
        raise to_http_error(e)

@router.get(
    "/games/{game_id}/boards/{user_id}",
    summary="Grille d'un joueur dans une partie",
    response_model=BoardOut,
)
def get_game_board(
    game_id: int = Path(..., ge=1),
    user_id: int = Path(...),
    svc: BoardService = Depends(get_board_service),
):
    try:
        return svc.get_board(user_id, game_id)
    except BingoError as e:
        raise to_http_error(e)

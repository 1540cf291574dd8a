"""
➡️ But : Centraliser les dépendances réutilisables des routes.

Exemples :

get_game_service() : crée un GameService à partir d’une session DB.

get_command_timeout() : échéance fournie par l'appelant (header X-Command-Timeout).

to_http_error() : traduit une erreur métier en HTTPException.

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

Facile à injecter dans plusieurs endpoints (Depends()).
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlmodel import Session

from app.core.config import settings
from app.core.errors import (
    BingoError,
    ConflictError,
    DistributionError,
    NotFoundError,
    OperationTimeoutError,
    StorageError,
    ValidationError,
)
from app.core.logger import logger
from app.db.session import get_session

from app.db.repositories.games import GameRepository
from app.db.repositories.events import EventRepository
from app.db.repositories.boards import BoardRepository
from app.db.repositories.squares import SquareRepository
from app.db.repositories.votes import VoteRepository

from app.features.games.services import GameService
from app.features.events.services import EventService
from app.features.boards.services import BoardService
from app.features.votes.services import VoteService


# -----------------------------
# Échéance des commandes
# -----------------------------
def get_command_timeout(
    x_command_timeout: Optional[float] = Header(
        default=None,
        alias="X-Command-Timeout",
        description="Échéance en secondes pour l'opération (défaut : COMMAND_TIMEOUT_SECONDS)",
    ),
) -> float:
    if x_command_timeout is None or x_command_timeout <= 0:
        return settings.COMMAND_TIMEOUT_SECONDS
    return x_command_timeout


# -----------------------------
# Repositories
# -----------------------------
def get_game_repository(session: Session = Depends(get_session)) -> GameRepository:
    return GameRepository(session)

def get_event_repository(session: Session = Depends(get_session)) -> EventRepository:
    return EventRepository(session)

def get_board_repository(session: Session = Depends(get_session)) -> BoardRepository:
    return BoardRepository(session)

def get_square_repository(session: Session = Depends(get_session)) -> SquareRepository:
    return SquareRepository(session)

def get_vote_repository(session: Session = Depends(get_session)) -> VoteRepository:
    return VoteRepository(session)


# -----------------------------
# Services
# -----------------------------
def get_game_service(
    session: Session = Depends(get_session),
    game_repo: GameRepository = Depends(get_game_repository),
    event_repo: EventRepository = Depends(get_event_repository),
    board_repo: BoardRepository = Depends(get_board_repository),
    square_repo: SquareRepository = Depends(get_square_repository),
    timeout: float = Depends(get_command_timeout),
) -> GameService:
    return GameService(
        session=session,
        game_repo=game_repo,
        event_repo=event_repo,
        board_repo=board_repo,
        square_repo=square_repo,
        timeout=timeout,
    )

def get_event_service(
    game_svc: GameService = Depends(get_game_service),
    event_repo: EventRepository = Depends(get_event_repository),
) -> EventService:
    return EventService(game_svc=game_svc, event_repo=event_repo)

def get_board_service(
    game_svc: GameService = Depends(get_game_service),
    board_repo: BoardRepository = Depends(get_board_repository),
) -> BoardService:
    return BoardService(game_svc=game_svc, board_repo=board_repo)

def get_vote_service(
    session: Session = Depends(get_session),
    game_svc: GameService = Depends(get_game_service),
    event_repo: EventRepository = Depends(get_event_repository),
    board_repo: BoardRepository = Depends(get_board_repository),
    vote_repo: VoteRepository = Depends(get_vote_repository),
    timeout: float = Depends(get_command_timeout),
) -> VoteService:
    return VoteService(
        session=session,
        game_svc=game_svc,
        event_repo=event_repo,
        board_repo=board_repo,
        vote_repo=vote_repo,
        timeout=timeout,
    )


# -----------------------------
# Erreurs métier -> HTTP
# -----------------------------
def to_http_error(exc: BingoError) -> HTTPException:
    if isinstance(exc, ValidationError):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, ConflictError):
        code = status.HTTP_409_CONFLICT
    elif isinstance(exc, OperationTimeoutError):
        code = status.HTTP_504_GATEWAY_TIMEOUT
    elif isinstance(exc, StorageError):
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR

    if isinstance(exc, (ValidationError, NotFoundError, ConflictError)):
        # refus attendu, pas une panne
        logger.info(f"Rejected: {exc.code} - {exc.message}")
    elif isinstance(exc, DistributionError):
        logger.error(f"Invariant violated: {exc.message}")

    # les pannes de stockage restent opaques pour l'appelant
    message = "Storage unavailable" if isinstance(exc, StorageError) and not isinstance(exc, OperationTimeoutError) else exc.message
    return HTTPException(status_code=code, detail={"code": exc.code, "message": message})

from fastapi import APIRouter, Depends, status

from app.api.v1.dependencies import get_vote_service, to_http_error
from app.core.errors import BingoError
from app.features.votes.schemas import VoteIn, VoteOut
from app.features.votes.services import VoteService


router = APIRouter(
    prefix="/votes",
    tags=["votes"],
    responses={404: {"description": "Not Found"}},
)

@router.post(
    "",
    summary="Voter pour un événement qui s'est produit",
    status_code=status.HTTP_201_CREATED,
    response_model=VoteOut,
    responses={409: {"description": "Already voted / already resolved"}},
)
def submit_vote(
    payload: VoteIn,
    svc: VoteService = Depends(get_vote_service),
):
    try:
        return svc.submit_vote(payload)
    except BingoError as e:
        raise to_http_error(e)

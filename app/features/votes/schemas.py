from typing import List, Optional
from pydantic import BaseModel, Field


class VoteIn(BaseModel):
    """
    Voter pour un événement qui s'est produit.
    - display_id : numéro de l'événement affiché aux joueurs
    - game_id : optionnel, partie active par défaut
    """
    display_id: int = Field(ge=1, examples=[1])
    voter_id: int = Field(examples=[1001])
    game_id: Optional[int] = Field(default=None, ge=1)


class VoteOut(BaseModel):
    game_id: int
    display_id: int
    description: str
    votes: int
    required: int
    closed: bool
    winners: List[int] = []
    # renseigné si la détection de victoire a échoué après la résolution
    detection_error: Optional[str] = None


class EventVotersOut(BaseModel):
    game_id: int
    display_id: int
    voter_ids: List[int]

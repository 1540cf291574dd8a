from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from app.core.config import settings


# -----------------------------
# Game creation
# -----------------------------

class GameCreateIn(BaseModel):
    title: str = Field(min_length=1, max_length=200, examples=["Soirée élections"])
    grid_size: int = Field(
        ge=settings.GRID_SIZE_MIN,
        le=settings.GRID_SIZE_MAX,
        description="Taille de la grille (typiquement 3, 4 ou 5)",
        examples=[3],
    )
    player_ids: List[int] = Field(min_length=1, max_length=100, examples=[[1001, 1002]])
    events: List[str] = Field(min_length=1, description="Descriptions, dans l'ordre des display_id")

    @field_validator("events")
    @classmethod
    def strip_events(cls, value: List[str]) -> List[str]:
        cleaned = [e.strip() for e in value]
        if any(not e for e in cleaned):
            raise ValueError("Event descriptions must not be blank")
        return cleaned

    @model_validator(mode="after")
    def players_must_be_unique(self):
        if len(self.player_ids) != len(set(self.player_ids)):
            raise ValueError("Each player can only have one board")
        return self


class GameOut(BaseModel):
    id: int
    title: str
    grid_size: int
    is_active: bool

    model_config = {"from_attributes": True}


class GameCreateOut(GameOut):
    event_count: int
    player_ids: List[int]


# -----------------------------
# Listing
# -----------------------------

class GameSummaryOut(GameOut):
    player_count: int
    event_count: int
    closed_count: int


# -----------------------------
# Active game / delete
# -----------------------------

class ActiveGameOut(BaseModel):
    active_game: Optional[GameOut] = None


class GameDeleteOut(BaseModel):
    deleted_id: int
    active_game_id: Optional[int] = None

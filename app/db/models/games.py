from sqlmodel import Field
from sqlalchemy import Index, text

from app.db.models.base import BaseModelDB


class Game(BaseModelDB, table=True):
    __table_args__ = (
        # au plus une partie active : index unique partiel sur is_active = 1
        Index(
            "uq_games_single_active",
            "is_active",
            unique=True,
            sqlite_where=text("is_active = 1"),
            postgresql_where=text("is_active"),
        ),
    )

    title: str = Field(nullable=False, max_length=200)
    grid_size: int = Field(nullable=False)

    # ne jamais écrire directement : passer par GameRepository.set_active
    is_active: bool = Field(default=False, nullable=False)

from sqlmodel import Field
from sqlalchemy import BigInteger, UniqueConstraint

from app.db.models.base import BaseModelDB


class Board(BaseModelDB, table=True):
    __table_args__ = (
        UniqueConstraint("game_id", "user_id", name="uq_boards_game_user"),
    )

    game_id: int = Field(foreign_key="game.id", index=True)
    # identifiant du joueur côté plateforme de chat (snowflake 64 bits)
    user_id: int = Field(sa_type=BigInteger, nullable=False, index=True)

    grid_size: int = Field(nullable=False)

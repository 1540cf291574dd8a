"""Fixtures pytest : base SQLite en mémoire, services câblés, RNG déterministe."""

import os

os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_TO_FILE"] = "false"

import random
from types import SimpleNamespace

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from app.db.session import configure_sqlite
from app.db.repositories.games import GameRepository
from app.db.repositories.events import EventRepository
from app.db.repositories.boards import BoardRepository
from app.db.repositories.squares import SquareRepository
from app.db.repositories.votes import VoteRepository
from app.features.games.schemas import GameCreateIn
from app.features.games.services import GameService
from app.features.votes.services import VoteService


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    configure_sqlite(engine, wal=False)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def repos(session):
    return SimpleNamespace(
        games=GameRepository(session),
        events=EventRepository(session),
        boards=BoardRepository(session),
        squares=SquareRepository(session),
        votes=VoteRepository(session),
    )


@pytest.fixture
def game_service(session, repos, seeded_rng):
    return GameService(
        session=session,
        game_repo=repos.games,
        event_repo=repos.events,
        board_repo=repos.boards,
        square_repo=repos.squares,
        rng=seeded_rng,
    )


@pytest.fixture
def vote_service(session, repos, game_service):
    return VoteService(
        session=session,
        game_svc=game_service,
        event_repo=repos.events,
        board_repo=repos.boards,
        vote_repo=repos.votes,
    )


@pytest.fixture
def make_game(game_service):
    """Crée une partie avec `event_count` événements "Event 1".."Event n"."""

    def _make(grid_size=3, player_ids=(1, 2), event_count=10, title="Test game"):
        payload = GameCreateIn(
            title=title,
            grid_size=grid_size,
            player_ids=list(player_ids),
            events=[f"Event {i}" for i in range(1, event_count + 1)],
        )
        return game_service.create_game(payload)

    return _make

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from app.core.errors import ConflictError, OperationTimeoutError, StorageError
from app.db.models.games import Game
from app.db.transaction import Deadline, unit_of_work


def test_commits_on_success(session, repos):
    with unit_of_work(session, timeout=10):
        repos.games.create(commit=False, title="ok", grid_size=3)

    assert [g.title for g in session.exec(select(Game)).all()] == ["ok"]


def test_storage_errors_are_wrapped_and_rolled_back(session, repos):
    with pytest.raises(StorageError) as exc_info:
        with unit_of_work(session, timeout=10):
            repos.games.create(commit=False, title="lost", grid_size=3)
            raise OperationalError("INSERT", {}, Exception("disk full"))

    assert isinstance(exc_info.value.__cause__, OperationalError)
    assert session.exec(select(Game)).all() == []


def test_business_errors_pass_through(session, repos):
    with pytest.raises(ConflictError):
        with unit_of_work(session, timeout=10):
            repos.games.create(commit=False, title="lost", grid_size=3)
            raise ConflictError("nope")

    assert session.exec(select(Game)).all() == []


def test_expired_deadline_rolls_back(session, repos):
    with pytest.raises(OperationTimeoutError):
        with unit_of_work(session, timeout=-1):
            repos.games.create(commit=False, title="late", grid_size=3)

    assert session.exec(select(Game)).all() == []


def test_deadline_without_timeout_never_expires():
    deadline = Deadline(None)
    assert deadline.expired is False
    deadline.check()


def test_single_active_game_is_enforced_by_the_database(session, repos):
    from sqlalchemy.exc import IntegrityError

    repos.games.create(title="a", grid_size=3, is_active=True)
    with pytest.raises(IntegrityError):
        repos.games.create(title="b", grid_size=3, is_active=True)
    session.rollback()

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from app.core.errors import (
    ConflictError,
    GridSizeError,
    InsufficientEventsError,
    NoActiveGameError,
    NotFoundError,
    OperationTimeoutError,
    StorageError,
    UnknownGameError,
)
from app.db.models.boards import Board
from app.db.models.events import Event, EventStatus
from app.db.models.games import Game
from app.db.models.squares import Square
from app.db.models.votes import Vote
from app.db.repositories.squares import SquareRepository
from app.features.games.schemas import GameCreateIn
from app.features.games.services import GameService
from app.features.votes.schemas import VoteIn


def _count(session, model):
    return len(session.exec(select(model)).all())


def _active_ids(session):
    return [g.id for g in session.exec(select(Game).where(Game.is_active.is_(True))).all()]


# ---------------------------------------------------------------------
# Création
# ---------------------------------------------------------------------

def test_create_game_persists_events_boards_and_squares(session, repos, make_game):
    game = make_game(grid_size=3, player_ids=[11, 22], event_count=10)

    assert game["event_count"] == 10
    assert game["player_ids"] == [11, 22]
    assert game["is_active"] is True

    events = repos.events.list_for_game(game["id"])
    assert [e.display_id for e in events] == list(range(1, 11))
    assert [e.description for e in events][:2] == ["Event 1", "Event 2"]
    assert all(e.status == EventStatus.OPEN for e in events)

    assert repos.boards.count_for_game(game["id"]) == 2
    assert sorted(repos.boards.list_player_ids_for_game(game["id"])) == [11, 22]
    for user_id in (11, 22):
        board, squares = repos.boards.get_with_squares(game["id"], user_id)
        assert board.grid_size == 3
        assert len(squares) == 9
        assert len({s.event_id for s in squares}) == 9
        assert {(s.row, s.column) for s in squares} == {(r, c) for r in range(3) for c in range(3)}


def test_only_first_game_becomes_active(session, make_game):
    first = make_game(title="first")
    second = make_game(title="second")

    assert first["is_active"] is True
    assert second["is_active"] is False
    assert _active_ids(session) == [first["id"]]


def test_insufficient_events_is_rejected_without_side_effects(session, make_game):
    with pytest.raises(InsufficientEventsError) as exc_info:
        make_game(grid_size=4, event_count=10)

    assert exc_info.value.required == 16
    assert exc_info.value.shortfall == 6
    assert _count(session, Game) == 0


def test_grid_size_out_of_bounds_is_rejected(game_service):
    payload = GameCreateIn.model_construct(
        title="too big", grid_size=11, player_ids=[1], events=[str(i) for i in range(121)]
    )
    with pytest.raises(GridSizeError):
        game_service.create_game(payload)


def test_create_game_is_atomic(session, game_service, monkeypatch):
    calls = {"n": 0}
    original = SquareRepository.bulk_create_for_board

    def flaky(self, board_id, cells, *, commit=True):
        calls["n"] += 1
        if calls["n"] == 2:
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))
        return original(self, board_id, cells, commit=commit)

    monkeypatch.setattr(SquareRepository, "bulk_create_for_board", flaky)

    payload = GameCreateIn(
        title="atomic", grid_size=2, player_ids=[1, 2, 3], events=[f"e{i}" for i in range(6)]
    )
    with pytest.raises(StorageError):
        game_service.create_game(payload)

    for model in (Game, Event, Board, Square):
        assert _count(session, model) == 0


def test_create_game_past_deadline_commits_nothing(session, repos, seeded_rng):
    svc = GameService(
        session=session,
        game_repo=repos.games,
        event_repo=repos.events,
        board_repo=repos.boards,
        square_repo=repos.squares,
        rng=seeded_rng,
        timeout=-1,
    )
    payload = GameCreateIn(title="late", grid_size=2, player_ids=[1], events=["a", "b", "c", "d"])

    with pytest.raises(OperationTimeoutError):
        svc.create_game(payload)
    assert _count(session, Game) == 0
    assert _count(session, Event) == 0


# ---------------------------------------------------------------------
# Partie active
# ---------------------------------------------------------------------

def test_set_active_game_swaps_flag(session, game_service, make_game):
    first = make_game(title="first")
    second = make_game(title="second")

    game = game_service.set_active_game(second["id"])

    assert game.is_active is True
    assert _active_ids(session) == [second["id"]]
    assert game_service.get_active_game().id == second["id"]

    # idempotent
    game_service.set_active_game(second["id"])
    assert _active_ids(session) == [second["id"]]

    game_service.set_active_game(first["id"])
    assert _active_ids(session) == [first["id"]]


def test_set_active_unknown_game(game_service):
    with pytest.raises(NotFoundError):
        game_service.set_active_game(999)


def test_resolve_game_defaults_to_active(game_service, make_game):
    with pytest.raises(NoActiveGameError):
        game_service.resolve_game()

    game = make_game()
    assert game_service.resolve_game().id == game["id"]
    assert game_service.resolve_game(game["id"]).id == game["id"]
    with pytest.raises(NotFoundError):
        game_service.resolve_game(12345)


# ---------------------------------------------------------------------
# Suppression en cascade
# ---------------------------------------------------------------------

def test_delete_active_game_cascades_and_elects_lowest_id(session, game_service, vote_service, make_game):
    first = make_game(title="first")
    second = make_game(title="second")
    third = make_game(title="third")
    game_service.set_active_game(second["id"])

    vote_service.submit_vote(VoteIn(game_id=second["id"], display_id=1, voter_id=1))
    assert _count(session, Vote) == 1

    result = game_service.delete_game(second["id"])

    assert result == {"deleted_id": second["id"], "active_game_id": first["id"]}
    assert _active_ids(session) == [first["id"]]
    assert session.get(Game, second["id"]) is None
    assert _count(session, Vote) == 0
    assert session.exec(select(Event).where(Event.game_id == second["id"])).all() == []
    assert session.exec(select(Board).where(Board.game_id == second["id"])).all() == []
    # les autres parties sont intactes : 2 parties × 2 grilles × 9 cases
    assert _count(session, Board) == 4
    assert _count(session, Square) == 36
    assert session.get(Game, third["id"]) is not None


def test_delete_inactive_game_keeps_active(session, game_service, make_game):
    first = make_game(title="first")
    second = make_game(title="second")

    result = game_service.delete_game(second["id"])

    assert result["active_game_id"] == first["id"]
    assert _active_ids(session) == [first["id"]]


def test_delete_last_game_leaves_no_active(session, game_service, make_game):
    game = make_game()

    result = game_service.delete_game(game["id"])

    assert result["active_game_id"] is None
    assert _active_ids(session) == []
    for model in (Game, Event, Board, Square):
        assert _count(session, model) == 0


def test_delete_unknown_game(game_service, make_game):
    game = make_game()

    with pytest.raises(UnknownGameError) as exc:
        game_service.delete_game(42)

    assert isinstance(exc.value, ConflictError)
    assert exc.value.code == "GAME_NOT_FOUND"
    assert game_service.get_active_game().id == game["id"]


# ---------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------

def test_list_games_with_stats(game_service, vote_service, make_game):
    first = make_game(title="first", player_ids=[1], event_count=9)
    second = make_game(title="second", player_ids=[1, 2, 3], event_count=12)

    # 1 joueur : un vote suffit
    vote_service.submit_vote(VoteIn(game_id=first["id"], display_id=1, voter_id=1))

    games = game_service.list_games()

    assert [g["id"] for g in games] == [second["id"], first["id"]]
    by_id = {g["id"]: g for g in games}
    assert by_id[first["id"]] == {
        "id": first["id"],
        "title": "first",
        "grid_size": 3,
        "is_active": True,
        "player_count": 1,
        "event_count": 9,
        "closed_count": 1,
    }
    assert by_id[second["id"]]["player_count"] == 3
    assert by_id[second["id"]]["event_count"] == 12
    assert by_id[second["id"]]["closed_count"] == 0

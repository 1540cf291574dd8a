import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session

from app.core.errors import (
    DuplicateVoteError,
    EventAlreadyResolvedError,
    InvalidTransitionError,
    NoActiveGameError,
    NotFoundError,
)
from app.db.models.events import EventStatus
from app.db.repositories.events import EventRepository
from app.features.votes.schemas import VoteIn


def _vote(vote_service, voter_id, display_id, game_id=None):
    return vote_service.submit_vote(VoteIn(game_id=game_id, display_id=display_id, voter_id=voter_id))


def test_end_to_end_two_players(repos, vote_service, make_game):
    game = make_game(grid_size=3, player_ids=[1, 2], event_count=10)
    for user_id in (1, 2):
        _, squares = repos.boards.get_with_squares(game["id"], user_id)
        assert len({s.event_id for s in squares}) == 9

    first = _vote(vote_service, 1, 1)
    assert (first["votes"], first["required"], first["closed"]) == (1, 2, False)
    assert first["winners"] == []

    second = _vote(vote_service, 2, 1)
    assert (second["votes"], second["required"], second["closed"]) == (2, 2, True)
    assert second["winners"] == []
    assert second["detection_error"] is None
    assert repos.events.get_by_display_id(game["id"], 1).status == EventStatus.CLOSED


def test_duplicate_vote_is_rejected_and_count_unchanged(repos, vote_service, make_game):
    game = make_game(player_ids=[1, 2, 3])
    _vote(vote_service, 1, 4)

    with pytest.raises(DuplicateVoteError):
        _vote(vote_service, 1, 4)

    event = repos.events.get_by_display_id(game["id"], 4)
    assert repos.votes.count_for_event(event.id) == 1
    assert event.status == EventStatus.OPEN


def test_unique_constraint_backs_up_duplicate_check(repos, vote_service, make_game, monkeypatch):
    game = make_game(player_ids=[1, 2, 3])
    _vote(vote_service, 1, 2)

    # simule une course : la vérification applicative ne voit pas le premier vote
    monkeypatch.setattr(repos.votes, "has_voted", lambda event_id, user_id: False)
    with pytest.raises(DuplicateVoteError):
        _vote(vote_service, 1, 2)

    event = repos.events.get_by_display_id(game["id"], 2)
    assert repos.votes.count_for_event(event.id) == 1


def test_vote_rejected_when_event_closes_concurrently(engine, repos, vote_service, make_game, monkeypatch):
    game = make_game(player_ids=[1, 2])

    def close_elsewhere(event_id, user_id):
        # une autre connexion résout l'événement entre la vérification et l'insert
        with Session(engine) as other:
            other_repo = EventRepository(other)
            assert other_repo.close_if_open(other_repo.get_by_display_id(game["id"], 1)) is True
            other.commit()
        return False

    monkeypatch.setattr(repos.votes, "has_voted", close_elsewhere)
    with pytest.raises(EventAlreadyResolvedError):
        _vote(vote_service, 1, 1)

    event = repos.events.get_by_display_id(game["id"], 1)
    assert event.status == EventStatus.CLOSED
    assert repos.votes.count_for_event(event.id) == 0


def test_resolution_is_monotonic(repos, vote_service, make_game):
    game = make_game(player_ids=[1, 2])
    _vote(vote_service, 1, 3)
    _vote(vote_service, 2, 3)

    with pytest.raises(EventAlreadyResolvedError):
        _vote(vote_service, 3, 3)
    with pytest.raises(EventAlreadyResolvedError):
        _vote(vote_service, 1, 3)

    event = repos.events.get_by_display_id(game["id"], 3)
    assert event.status == EventStatus.CLOSED
    assert repos.votes.count_for_event(event.id) == 2

    with pytest.raises(InvalidTransitionError):
        repos.events.update_status(event, EventStatus.OPEN)


def test_supermajority_with_four_players(vote_service, make_game):
    make_game(player_ids=[1, 2, 3, 4])

    assert _vote(vote_service, 1, 1)["closed"] is False
    assert _vote(vote_service, 2, 1)["closed"] is False
    third = _vote(vote_service, 3, 1)
    assert (third["votes"], third["required"], third["closed"]) == (3, 3, True)


def test_single_player_row_win(vote_service, make_game):
    # pool = 4 = une grille : distribution (0,0)=#1 (0,1)=#2 (1,0)=#3 (1,1)=#4
    make_game(grid_size=2, player_ids=[7], event_count=4)

    first = _vote(vote_service, 7, 1)
    assert first["closed"] is True
    assert first["winners"] == []

    second = _vote(vote_service, 7, 2)
    assert second["closed"] is True
    assert second["winners"] == [7]


def test_only_boards_with_a_full_line_win(vote_service, make_game):
    # pool = 8 = 2 grilles : round-robin, le joueur 1 reçoit #1 #3 #5 #7, le joueur 2 #2 #4 #6 #8
    make_game(grid_size=2, player_ids=[1, 2], event_count=8)

    for display_id in (1, 3):
        _vote(vote_service, 1, display_id)
        result = _vote(vote_service, 2, display_id)

    assert result["closed"] is True
    assert result["winners"] == [1]


def test_detection_failure_does_not_undo_resolution(repos, vote_service, make_game, monkeypatch):
    game = make_game(grid_size=2, player_ids=[7], event_count=4)

    def broken(game_id):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(vote_service, "find_winners", broken)
    result = _vote(vote_service, 7, 1)

    assert result["closed"] is True
    assert result["detection_error"] == "OperationalError"
    assert repos.events.get_by_display_id(game["id"], 1).status == EventStatus.CLOSED


def test_concurrent_close_only_flips_once(engine, session, repos, make_game):
    game = make_game(player_ids=[1, 2])
    event = repos.events.get_by_display_id(game["id"], 5)
    assert event.status == EventStatus.OPEN

    with Session(engine) as other:
        other_repo = EventRepository(other)
        assert other_repo.close_if_open(other_repo.get_by_display_id(game["id"], 5)) is True
        other.commit()

    assert repos.events.close_if_open(event) is False
    assert event.status == EventStatus.CLOSED


def test_unknown_event(vote_service, make_game):
    make_game()
    with pytest.raises(NotFoundError):
        _vote(vote_service, 1, 99)


def test_vote_targets_explicit_game(vote_service, game_service, make_game):
    first = make_game(title="first")
    second = make_game(title="second")

    result = _vote(vote_service, 1, 1, game_id=second["id"])

    assert result["game_id"] == second["id"]
    assert game_service.get_active_game().id == first["id"]


def test_vote_without_active_game(vote_service):
    with pytest.raises(NoActiveGameError):
        _vote(vote_service, 1, 1)


def test_list_voters(vote_service, make_game):
    game = make_game(player_ids=[1, 2, 3])
    _vote(vote_service, 3, 6)
    _vote(vote_service, 1, 6)

    voters = vote_service.list_voters(game["id"], 6)

    assert voters == {"game_id": game["id"], "display_id": 6, "voter_ids": [3, 1]}

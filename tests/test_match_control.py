"""
Tests for the bout lifecycle, clock and scoring.
"""

import sys
import os

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from wrestling_meet.core.exceptions import InvalidInput, InvalidTransition
from wrestling_meet.models import EventAction, Match, MatchSide, MatchStatus, WinType
from wrestling_meet.services.match_control import MatchController, format_time
from wrestling_meet.services.storage import WrestlingRepository


def _match(match_id="m1"):
    return Match(
        id=match_id,
        weight_class=120,
        my_wrestler_id="w1",
        my_team_id="t1",
        opponent_name="Sam Opponent",
        opponent_team="Rivals"
    )


def test_format_time():
    assert format_time(0) == "0:00"
    assert format_time(65) == "1:05"
    assert format_time(180) == "3:00"
    assert format_time(-4) == "0:00"


def test_lifecycle_pending_active_completed():
    """A bout starts pending, scores while active and ends completed."""
    controller = MatchController(_match())
    assert controller.match.status == MatchStatus.PENDING

    controller.start()
    assert controller.match.status == MatchStatus.ACTIVE
    assert controller.match.current_time == 180
    assert len(controller.match.periods) == 1

    controller.add_points(MatchSide.MY_WRESTLER, 2, EventAction.TAKEDOWN)
    controller.add_points(MatchSide.OPPONENT, 1, EventAction.ESCAPE)
    controller.add_points(MatchSide.MY_WRESTLER, 3, EventAction.NEAR_FALL)
    assert (controller.match.my_score, controller.match.opponent_score) == (5, 1)
    assert controller.match.periods[0].my_score == 5

    controller.start_timer()
    controller.tick(45)
    match = controller.end_match()

    assert match.status == MatchStatus.COMPLETED
    assert match.final_result.winner == MatchSide.MY_WRESTLER
    assert match.final_result.win_type == WinType.DECISION
    assert (match.final_result.my_score, match.final_result.opponent_score) == (5, 1)
    assert match.final_result.duration == "0:45"
    assert not match.is_running

    actions = [e.action for e in controller.events]
    assert actions[0] == EventAction.MATCH_START
    assert actions[-1] == EventAction.MATCH_END
    assert controller.events[1].my_score_after == 2


def test_completed_is_terminal():
    controller = MatchController(_match())
    controller.start()
    controller.end_match(WinType.PIN, MatchSide.OPPONENT)

    with pytest.raises(InvalidTransition):
        controller.add_points(MatchSide.MY_WRESTLER, 2, EventAction.TAKEDOWN)
    with pytest.raises(InvalidTransition):
        controller.start_timer()
    with pytest.raises(InvalidTransition):
        controller.end_match()
    with pytest.raises(InvalidTransition):
        controller.start()


def test_pending_match_cannot_score_or_run_clock():
    controller = MatchController(_match())
    with pytest.raises(InvalidTransition):
        controller.add_points(MatchSide.MY_WRESTLER, 2, EventAction.TAKEDOWN)
    with pytest.raises(InvalidTransition):
        controller.start_timer()
    with pytest.raises(InvalidTransition):
        controller.end_match()


def test_pending_match_can_be_forfeited():
    controller = MatchController(_match())
    match = controller.end_match(WinType.FORFEIT, MatchSide.MY_WRESTLER)
    assert match.status == MatchStatus.COMPLETED
    assert match.final_result.win_type == WinType.FORFEIT


def test_clock_stops_at_zero():
    controller = MatchController(_match(), period_duration=10)
    controller.start()
    controller.start_timer()

    assert controller.tick(4) == 6
    assert controller.tick(20) == 0
    assert not controller.match.is_running

    with pytest.raises(InvalidTransition):
        controller.start_timer()


def test_tick_rejects_non_positive_seconds():
    controller = MatchController(_match())
    controller.start()
    controller.start_timer()

    for seconds in (0, -100, 1.5, True):
        with pytest.raises(InvalidInput):
            controller.tick(seconds)
    assert controller.match.current_time == 180


def test_pause_and_reset():
    controller = MatchController(_match())
    controller.start()
    controller.start_timer()
    controller.tick(30)

    controller.pause_timer()
    assert controller.tick() == 150  # Paused clock does not move

    controller.reset_timer()
    assert controller.match.current_time == 180
    assert not controller.match.is_running


def test_next_period():
    controller = MatchController(_match())
    controller.start()
    controller.add_points(MatchSide.OPPONENT, 2, EventAction.TAKEDOWN)
    controller.start_timer()
    controller.tick(180)
    controller.next_period()
    controller.add_points(MatchSide.MY_WRESTLER, 2, EventAction.REVERSAL)

    assert controller.match.current_period == 2
    assert controller.match.current_time == 180
    assert [(p.my_score, p.opponent_score) for p in controller.match.periods] == [(0, 2), (2, 0)]


def test_tied_score_goes_to_opponent():
    controller = MatchController(_match())
    controller.start()
    controller.add_points(MatchSide.MY_WRESTLER, 2, EventAction.TAKEDOWN)
    controller.add_points(MatchSide.OPPONENT, 2, EventAction.REVERSAL)
    assert controller.end_match().final_result.winner == MatchSide.OPPONENT


def test_rejects_non_scoring_actions_and_bad_points():
    controller = MatchController(_match())
    controller.start()

    with pytest.raises(InvalidInput):
        controller.add_points(MatchSide.MY_WRESTLER, 2, EventAction.CAUTION)
    with pytest.raises(InvalidInput):
        controller.add_points(MatchSide.MY_WRESTLER, 0, EventAction.TAKEDOWN)
    with pytest.raises(InvalidInput):
        controller.add_points(MatchSide.MY_WRESTLER, -2, EventAction.TAKEDOWN)


def test_caution_logs_without_points():
    controller = MatchController(_match())
    controller.start()
    controller.record_caution(MatchSide.OPPONENT)

    event = controller.events[-1]
    assert event.action == EventAction.CAUTION
    assert event.points == 0
    assert controller.match.opponent_score == 0


def test_controller_persists_through_repository():
    repo = WrestlingRepository()
    match = repo.create_match(_match(match_id=""))
    controller = MatchController(match, repository=repo)

    controller.start()
    controller.add_points(MatchSide.MY_WRESTLER, 2, EventAction.TAKEDOWN)

    stored = repo.get_match(match.id)
    assert stored.status == MatchStatus.ACTIVE
    assert stored.my_score == 2

    events = repo.get_event_logs_by_match(match.id)
    assert [e.action for e in events] == [EventAction.MATCH_START, EventAction.TAKEDOWN]
    assert all(e.id for e in events)

"""
Tests for the repository over the in-memory key-value store.
"""

import sys
import os
from datetime import datetime, timedelta

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from wrestling_meet.core.exceptions import NotFoundError
from wrestling_meet.models import (
    ChoiceParity, CompetitionStatus, EventAction, EventLog, Match
)
from wrestling_meet.services.dual_meet import create_dual_meet
from wrestling_meet.services.storage import InMemoryStore, WrestlingRepository


def test_in_memory_store_collections_are_separate():
    store = InMemoryStore()
    store.put("teams", "1", "team")
    store.put("wrestlers", "1", "wrestler")

    assert store.get("teams", "1") == "team"
    assert store.values("wrestlers") == ["wrestler"]

    store.delete("teams", "1")
    store.delete("teams", "missing")
    assert store.get("teams", "1") is None
    assert store.values("matches") == []


def test_team_and_wrestler_crud():
    repo = WrestlingRepository()
    team = repo.create_team("Eagles")
    other = repo.create_team("Hawks")
    wrestler = repo.create_wrestler("Alex", team.id, grade="10")
    repo.create_wrestler("Blake", other.id)

    assert repo.get_team(team.id).name == "Eagles"
    assert [w.name for w in repo.get_wrestlers_by_team(team.id)] == ["Alex"]

    renamed = repo.update_team(team.id, name="Golden Eagles", id="changed")
    assert renamed.id == team.id
    assert repo.get_team(team.id).name == "Golden Eagles"

    moved = repo.update_wrestler(wrestler.id, team_id=other.id)
    assert moved.team_id == other.id
    assert len(repo.get_wrestlers_by_team(other.id)) == 2

    repo.delete_wrestler(wrestler.id)
    assert len(repo.get_wrestlers()) == 1
    repo.delete_team(team.id)
    assert [t.name for t in repo.get_teams()] == ["Hawks"]


def test_update_missing_record_raises():
    repo = WrestlingRepository()
    with pytest.raises(NotFoundError):
        repo.update_team("missing", name="x")
    with pytest.raises(NotFoundError):
        repo.get_match("missing")
    with pytest.raises(KeyError):
        repo.get_wrestler("missing")


def test_create_match_attaches_to_competition():
    repo = WrestlingRepository()
    competition = repo.create_competition("Senior Night", ["t1", "t2"])
    match = repo.create_match(Match(
        id="", competition_id=competition.id, weight_class=120,
        my_wrestler_id="w1", my_team_id="t1", opponent_name="Opponent"
    ))

    assert match.id
    assert repo.get_competition(competition.id).match_ids == [match.id]
    assert repo.get_matches_by_competition(competition.id) == [match]

    started = repo.update_competition(competition.id, status=CompetitionStatus.ACTIVE)
    assert started.status == CompetitionStatus.ACTIVE


def test_dual_meets_round_trip():
    repo = WrestlingRepository()
    dual_meet = create_dual_meet("h", "a", [106, 113], 113, ChoiceParity.ODDS)
    repo.save_dual_meet(dual_meet)

    assert repo.get_dual_meet(dual_meet.id) is dual_meet
    assert repo.get_dual_meets() == [dual_meet]


def test_event_logs_sorted_by_time():
    repo = WrestlingRepository()
    now = datetime.now()
    later = EventLog(id="", match_id="m1", period=1, time_remaining=100,
                     action=EventAction.TAKEDOWN, timestamp=now + timedelta(seconds=5))
    earlier = EventLog(id="", match_id="m1", period=1, time_remaining=180,
                       action=EventAction.MATCH_START, timestamp=now)
    other = EventLog(id="", match_id="m2", period=1, time_remaining=180,
                     action=EventAction.MATCH_START, timestamp=now)

    repo.add_event_log(later)
    repo.add_event_log(earlier)
    repo.add_event_log(other)

    events = repo.get_event_logs_by_match("m1")
    assert [e.action for e in events] == [EventAction.MATCH_START, EventAction.TAKEDOWN]

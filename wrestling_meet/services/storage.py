"""
Storage layer for teams, wrestlers, competitions, matches, dual meets and
event logs.

Records live in a key-value store injected into the repository, one
collection per record type. InMemoryStore is the only bundled store.
"""

import dataclasses
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from wrestling_meet.core.exceptions import NotFoundError
from wrestling_meet.core.logging_config import get_logger
from wrestling_meet.models import (
    Competition, CompetitionFormat, DualMeet, EventLog, Match, Team, Wrestler
)

logger = get_logger(__name__)

TEAMS = "teams"
WRESTLERS = "wrestlers"
COMPETITIONS = "competitions"
MATCHES = "matches"
DUAL_MEETS = "dual_meets"
EVENT_LOGS = "event_logs"


class KeyValueStore(ABC):
    """Collection-scoped key-value storage."""

    @abstractmethod
    def get(self, collection: str, key: str) -> Optional[Any]:
        ...

    @abstractmethod
    def put(self, collection: str, key: str, value: Any) -> None:
        ...

    @abstractmethod
    def delete(self, collection: str, key: str) -> None:
        ...

    @abstractmethod
    def values(self, collection: str) -> List[Any]:
        ...


class InMemoryStore(KeyValueStore):
    """Dict-backed store; contents are lost with the process."""

    def __init__(self):
        self._collections: Dict[str, Dict[str, Any]] = {}

    def get(self, collection: str, key: str) -> Optional[Any]:
        return self._collections.get(collection, {}).get(key)

    def put(self, collection: str, key: str, value: Any) -> None:
        self._collections.setdefault(collection, {})[key] = value

    def delete(self, collection: str, key: str) -> None:
        self._collections.get(collection, {}).pop(key, None)

    def values(self, collection: str) -> List[Any]:
        return list(self._collections.get(collection, {}).values())


class WrestlingRepository:
    """
    CRUD operations over an injected KeyValueStore.

    Updates take keyword fields and replace the stored record; the id of a
    record never changes.
    """

    def __init__(self, store: Optional[KeyValueStore] = None):
        self.store = store or InMemoryStore()

    @staticmethod
    def _generate_id() -> str:
        return str(uuid.uuid4())

    def _require(self, collection: str, record_id: str, label: str):
        record = self.store.get(collection, record_id)
        if record is None:
            raise NotFoundError(f"{label} with id {record_id} not found")
        return record

    def _update(self, collection: str, record_id: str, label: str, updates: Dict[str, Any]):
        existing = self._require(collection, record_id, label)
        updates = {k: v for k, v in updates.items() if k not in ("id", "created_at")}
        updated = dataclasses.replace(existing, **updates)
        self.store.put(collection, record_id, updated)
        return updated

    # Teams
    def create_team(self, name: str) -> Team:
        team = Team(id=self._generate_id(), name=name)
        self.store.put(TEAMS, team.id, team)
        logger.info("Created team %s (%s)", team.name, team.id)
        return team

    def get_teams(self) -> List[Team]:
        return self.store.values(TEAMS)

    def get_team(self, team_id: str) -> Team:
        return self._require(TEAMS, team_id, "Team")

    def update_team(self, team_id: str, **updates) -> Team:
        return self._update(TEAMS, team_id, "Team", updates)

    def delete_team(self, team_id: str) -> None:
        self.store.delete(TEAMS, team_id)

    # Wrestlers
    def create_wrestler(self, name: str, team_id: str, grade: str = "", weigh_in=None) -> Wrestler:
        wrestler = Wrestler(
            id=self._generate_id(),
            name=name,
            team_id=team_id,
            grade=grade,
            weigh_in=weigh_in
        )
        self.store.put(WRESTLERS, wrestler.id, wrestler)
        return wrestler

    def get_wrestlers(self) -> List[Wrestler]:
        return self.store.values(WRESTLERS)

    def get_wrestlers_by_team(self, team_id: str) -> List[Wrestler]:
        return [w for w in self.store.values(WRESTLERS) if w.team_id == team_id]

    def get_wrestler(self, wrestler_id: str) -> Wrestler:
        return self._require(WRESTLERS, wrestler_id, "Wrestler")

    def update_wrestler(self, wrestler_id: str, **updates) -> Wrestler:
        return self._update(WRESTLERS, wrestler_id, "Wrestler", updates)

    def delete_wrestler(self, wrestler_id: str) -> None:
        self.store.delete(WRESTLERS, wrestler_id)

    # Competitions
    def create_competition(self, name: str, team_ids: List[str],
                           competition_format: CompetitionFormat = CompetitionFormat.DUAL) -> Competition:
        competition = Competition(
            id=self._generate_id(),
            name=name,
            format=competition_format,
            team_ids=list(team_ids)
        )
        self.store.put(COMPETITIONS, competition.id, competition)
        logger.info("Created %s competition %s", competition_format.value, name)
        return competition

    def get_competitions(self) -> List[Competition]:
        return self.store.values(COMPETITIONS)

    def get_competition(self, competition_id: str) -> Competition:
        return self._require(COMPETITIONS, competition_id, "Competition")

    def update_competition(self, competition_id: str, **updates) -> Competition:
        return self._update(COMPETITIONS, competition_id, "Competition", updates)

    # Matches
    def create_match(self, match: Match) -> Match:
        """Store a new match and attach it to its competition, if any."""
        if not match.id:
            match = dataclasses.replace(match, id=self._generate_id())
        self.store.put(MATCHES, match.id, match)

        if match.competition_id:
            competition = self.store.get(COMPETITIONS, match.competition_id)
            if competition is not None:
                self.update_competition(competition.id, match_ids=competition.match_ids + [match.id])
        return match

    def get_matches(self) -> List[Match]:
        return self.store.values(MATCHES)

    def get_matches_by_competition(self, competition_id: str) -> List[Match]:
        return [m for m in self.store.values(MATCHES) if m.competition_id == competition_id]

    def get_match(self, match_id: str) -> Match:
        return self._require(MATCHES, match_id, "Match")

    def update_match(self, match_id: str, **updates) -> Match:
        return self._update(MATCHES, match_id, "Match", updates)

    def save_match(self, match: Match) -> Match:
        self._require(MATCHES, match.id, "Match")
        self.store.put(MATCHES, match.id, match)
        return match

    # Dual meets
    def save_dual_meet(self, dual_meet: DualMeet) -> DualMeet:
        self.store.put(DUAL_MEETS, dual_meet.id, dual_meet)
        return dual_meet

    def get_dual_meets(self) -> List[DualMeet]:
        return self.store.values(DUAL_MEETS)

    def get_dual_meet(self, dual_meet_id: str) -> DualMeet:
        return self._require(DUAL_MEETS, dual_meet_id, "Dual meet")

    # Event logs
    def add_event_log(self, event: EventLog) -> EventLog:
        if not event.id:
            event = dataclasses.replace(event, id=self._generate_id())
        self.store.put(EVENT_LOGS, event.id, event)
        return event

    def get_event_logs_by_match(self, match_id: str) -> List[EventLog]:
        events = [e for e in self.store.values(EVENT_LOGS) if e.match_id == match_id]
        return sorted(events, key=lambda e: e.timestamp or datetime.min)

"""
Data models for the Wrestling Meet Manager.
Defines all data structures used throughout the application.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Dict, Union
from enum import Enum


class ChoiceParity(Enum):
    ODDS = "odds"
    EVENS = "evens"

class ChoiceHolder(Enum):
    HOME = "home"
    AWAY = "away"

class WeightUnit(Enum):
    LBS = "lbs"
    KG = "kg"

class WeighInStatus(Enum):
    MADE = "made"
    OVER = "over"
    PENDING = "pending"

class WeighInType(Enum):
    COMPETITION = "competition"
    PRACTICE_IN = "practice_in"
    PRACTICE_OUT = "practice_out"

class CompetitionFormat(Enum):
    DUAL = "dual"
    INDIVIDUAL = "individual"
    ROUND_ROBIN = "round_robin"

class CompetitionStatus(Enum):
    SETUP = "setup"
    ACTIVE = "active"
    COMPLETED = "completed"

class MatchStatus(Enum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"

class MatchSide(Enum):
    MY_WRESTLER = "my_wrestler"
    OPPONENT = "opponent"

class WinType(Enum):
    DECISION = "decision"
    PIN = "pin"
    TECHNICAL_FALL = "technical_fall"
    FORFEIT = "forfeit"
    INJURY = "injury"

class EventAction(Enum):
    TAKEDOWN = "takedown"
    ESCAPE = "escape"
    REVERSAL = "reversal"
    NEAR_FALL = "near_fall"
    PENALTY = "penalty"
    CAUTION = "caution"
    PIN = "pin"
    PERIOD_START = "period_start"
    PERIOD_END = "period_end"
    MATCH_START = "match_start"
    MATCH_END = "match_end"


# Weight class key used when grouping wrestlers; the string form marks
# wrestlers who weighed in without a class.
WeightClassKey = Union[int, str]


@dataclass(frozen=True)
class Bout:
    """One entry of a dual meet bout order."""
    position: int
    weight_class: int
    choice_holder: ChoiceHolder

    def __str__(self):
        return f"Match {self.position}: {self.weight_class} lbs - {self.choice_holder.value.title()} choice"


@dataclass
class Team:
    id: str
    name: str
    created_at: datetime = field(default_factory=datetime.now)

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, Team):
            return self.id == other.id
        return False


@dataclass
class WeighIn:
    weight: float
    unit: WeightUnit = WeightUnit.LBS
    timestamp: datetime = field(default_factory=datetime.now)
    weight_class: Optional[int] = None
    status: WeighInStatus = WeighInStatus.PENDING
    type: WeighInType = WeighInType.COMPETITION
    notes: str = ""


@dataclass
class Wrestler:
    id: str
    name: str
    team_id: str
    grade: str = ""
    weigh_in: Optional[WeighIn] = None
    created_at: datetime = field(default_factory=datetime.now)

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, Wrestler):
            return self.id == other.id
        return False


@dataclass(frozen=True)
class Pairing:
    """A potential bout between wrestlers of two teams at one weight class."""
    weight_class: WeightClassKey
    wrestler_a: Wrestler
    wrestler_b: Wrestler


@dataclass
class Competition:
    id: str
    name: str
    format: CompetitionFormat = CompetitionFormat.DUAL
    team_ids: List[str] = field(default_factory=list)
    match_ids: List[str] = field(default_factory=list)
    status: CompetitionStatus = CompetitionStatus.SETUP
    created_at: datetime = field(default_factory=datetime.now)


@dataclass
class DualMeet:
    id: str
    name: str
    home_team_id: str
    away_team_id: str
    weight_classes: List[int]
    starting_weight_class: int
    home_choice_parity: ChoiceParity
    grade_level: str = "high-school"
    home_choice_weight_classes: List[int] = field(default_factory=list)
    # weight class -> wrestler id, None marks a forfeit
    home_roster: Dict[int, Optional[str]] = field(default_factory=dict)
    away_roster: Dict[int, Optional[str]] = field(default_factory=dict)
    match_ids: List[str] = field(default_factory=list)
    status: CompetitionStatus = CompetitionStatus.SETUP
    created_at: datetime = field(default_factory=datetime.now)


@dataclass
class BoutSheetRow:
    """A bout joined with the wrestlers each team sends out."""
    bout: Bout
    home_wrestler_id: Optional[str] = None
    away_wrestler_id: Optional[str] = None

    @property
    def is_forfeit(self) -> bool:
        return self.home_wrestler_id is None or self.away_wrestler_id is None


@dataclass
class Period:
    number: int
    duration: int
    my_score: int = 0
    opponent_score: int = 0


@dataclass
class FinalResult:
    winner: MatchSide
    win_type: WinType
    my_score: int
    opponent_score: int
    duration: str


@dataclass
class Match:
    id: str
    weight_class: int
    my_wrestler_id: str
    my_team_id: str
    opponent_name: str
    opponent_team: str = ""
    competition_id: Optional[str] = None
    bout_number: Optional[int] = None
    periods: List[Period] = field(default_factory=list)
    current_period: int = 1
    current_time: int = 180
    my_score: int = 0
    opponent_score: int = 0
    is_running: bool = False
    status: MatchStatus = MatchStatus.PENDING
    final_result: Optional[FinalResult] = None
    video_path: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)


@dataclass
class EventLog:
    id: str
    match_id: str
    period: int
    time_remaining: int
    action: EventAction
    points: int = 0
    wrestler: Optional[MatchSide] = None
    my_score_after: int = 0
    opponent_score_after: int = 0
    description: str = ""
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class Violation:
    constraint_type: str
    severity: str
    description: str
    weight_classes: List[int] = field(default_factory=list)


@dataclass
class ValidationReport:
    is_valid: bool = True
    hard_violations: List[Violation] = field(default_factory=list)
    soft_violations: List[Violation] = field(default_factory=list)

    def add_violation(self, violation: Violation):
        if violation.severity == 'hard':
            self.hard_violations.append(violation)
            self.is_valid = False
        else:
            self.soft_violations.append(violation)

    def get_summary(self) -> str:
        summary = f"Dual Meet Valid: {self.is_valid}\n"
        summary += f"Hard Violations: {len(self.hard_violations)}\n"
        summary += f"Soft Violations: {len(self.soft_violations)}\n"
        return summary


@dataclass
class TeamStanding:
    team_id: str
    name: str
    wins: int = 0
    losses: int = 0
    points: int = 0

"""
API routes for rosters, weigh-ins, competitions, matches and dual meets.
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import List, Dict, Optional
from datetime import datetime

from wrestling_meet.core.config import (
    WEIGHT_CLASSES_BY_GRADE, DEFAULT_GRADE_LEVEL, SCORING_ACTIONS, PERIOD_DURATION_SECONDS
)
from wrestling_meet.core.exceptions import (
    WrestlingMeetError, InvalidInput, NotFoundError, InvalidTransition
)
from wrestling_meet.core.logging_config import get_logger
from wrestling_meet.models import (
    Bout, ChoiceParity, CompetitionFormat, CompetitionStatus, DualMeet, EventAction,
    Match, MatchSide, MatchStatus, WeighInType, WeightUnit, WinType, Wrestler
)
from wrestling_meet.services.dual_meet import (
    bout_sheet, compute_bout_order, create_dual_meet,
    group_wrestlers_by_weight_class, pair_wrestlers_for_dual
)
from wrestling_meet.services.match_control import MatchController
from wrestling_meet.services.review import calculate_team_points
from wrestling_meet.services.storage import WrestlingRepository
from wrestling_meet.services.validator import DualMeetValidator
from wrestling_meet.services.weigh_ins import find_weight_class, record_weigh_in


logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["wrestling"])

_repository = WrestlingRepository()


def get_repository() -> WrestlingRepository:
    """Process-wide repository; tests override this dependency."""
    return _repository


def _http_error(error: WrestlingMeetError) -> HTTPException:
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, InvalidTransition):
        return HTTPException(status_code=409, detail=str(error))
    if isinstance(error, InvalidInput):
        return HTTPException(status_code=422, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))


# Request models
class TeamRequest(BaseModel):
    name: str


class WrestlerRequest(BaseModel):
    name: str
    team_id: str
    grade: str = ""


class WrestlerUpdate(BaseModel):
    name: Optional[str] = None
    team_id: Optional[str] = None
    grade: Optional[str] = None


class WeighInRequest(BaseModel):
    weight: float
    unit: WeightUnit = WeightUnit.LBS
    weight_class: Optional[int] = None
    grade_level: str = DEFAULT_GRADE_LEVEL  # Used to find a class when none is given
    type: WeighInType = WeighInType.COMPETITION
    notes: str = ""


class CompetitionRequest(BaseModel):
    name: str
    format: CompetitionFormat = CompetitionFormat.DUAL
    team_ids: List[str]


class CompetitionUpdate(BaseModel):
    name: Optional[str] = None
    status: Optional[CompetitionStatus] = None


class MatchRequest(BaseModel):
    weight_class: int
    my_wrestler_id: str
    my_team_id: str
    opponent_name: str
    opponent_team: str = ""
    competition_id: Optional[str] = None
    bout_number: Optional[int] = None


class MatchUpdate(BaseModel):
    opponent_name: Optional[str] = None
    opponent_team: Optional[str] = None
    bout_number: Optional[int] = None
    video_path: Optional[str] = None


class TimerRequest(BaseModel):
    command: str  # start, pause, reset, tick, next_period
    seconds: int = 1


class ScoreRequest(BaseModel):
    wrestler: MatchSide
    action: EventAction
    points: Optional[int] = None  # Defaults to the action's usual value


class CautionRequest(BaseModel):
    wrestler: MatchSide


class EndMatchRequest(BaseModel):
    win_type: WinType = WinType.DECISION
    winner: Optional[MatchSide] = None


class BoutOrderRequest(BaseModel):
    weight_classes: List[int]
    starting_weight_class: int
    choice_parity: ChoiceParity


class DualMeetRequest(BaseModel):
    name: str = ""
    home_team_id: str
    away_team_id: str
    grade_level: str = DEFAULT_GRADE_LEVEL
    weight_classes: Optional[List[int]] = None  # Defaults to the grade level's classes
    starting_weight_class: int
    home_choice_parity: ChoiceParity = ChoiceParity.ODDS
    home_roster: Dict[int, Optional[str]] = {}
    away_roster: Dict[int, Optional[str]] = {}


# Response models
class TeamResponse(BaseModel):
    id: str
    name: str
    created_at: datetime


class WeighInResponse(BaseModel):
    weight: float
    unit: str
    timestamp: datetime
    weight_class: Optional[int]
    status: str
    type: str
    notes: str


class WrestlerResponse(BaseModel):
    id: str
    name: str
    team_id: str
    grade: str
    weigh_in: Optional[WeighInResponse]
    created_at: datetime


class CompetitionResponse(BaseModel):
    id: str
    name: str
    format: str
    team_ids: List[str]
    match_ids: List[str]
    status: str
    created_at: datetime


class PeriodResponse(BaseModel):
    number: int
    duration: int
    my_score: int
    opponent_score: int


class FinalResultResponse(BaseModel):
    winner: str
    win_type: str
    my_score: int
    opponent_score: int
    duration: str


class MatchResponse(BaseModel):
    id: str
    competition_id: Optional[str]
    bout_number: Optional[int]
    weight_class: int
    my_wrestler_id: str
    my_team_id: str
    opponent_name: str
    opponent_team: str
    periods: List[PeriodResponse]
    current_period: int
    current_time: int
    my_score: int
    opponent_score: int
    is_running: bool
    status: str
    final_result: Optional[FinalResultResponse]
    video_path: Optional[str]


class EventLogResponse(BaseModel):
    id: str
    match_id: str
    timestamp: datetime
    period: int
    time_remaining: int
    action: str
    wrestler: Optional[str]
    points: int
    my_score_after: int
    opponent_score_after: int
    description: str


class BoutResponse(BaseModel):
    position: int
    weight_class: int
    choice_holder: str
    label: str


class BoutSheetResponse(BaseModel):
    position: int
    weight_class: int
    choice_holder: str
    home_wrestler_id: Optional[str]
    away_wrestler_id: Optional[str]
    is_forfeit: bool


class DualMeetResponse(BaseModel):
    id: str
    name: str
    home_team_id: str
    away_team_id: str
    grade_level: str
    weight_classes: List[int]
    starting_weight_class: int
    home_choice_parity: str
    home_choice_weight_classes: List[int]
    home_roster: Dict[int, Optional[str]]
    away_roster: Dict[int, Optional[str]]
    match_ids: List[str]
    status: str
    bouts: List[BoutResponse]
    created_at: datetime


class ViolationResponse(BaseModel):
    constraint_type: str
    severity: str
    description: str
    weight_classes: List[int]


class ValidationResponse(BaseModel):
    is_valid: bool
    hard_violations: List[ViolationResponse]
    soft_violations: List[ViolationResponse]


class PairingResponse(BaseModel):
    weight_class: str
    wrestler_a_id: str
    wrestler_a_name: str
    wrestler_b_id: str
    wrestler_b_name: str


class TeamStandingResponse(BaseModel):
    team_id: str
    name: str
    wins: int
    losses: int
    points: int


# Converters
def _team_response(team) -> TeamResponse:
    return TeamResponse(id=team.id, name=team.name, created_at=team.created_at)


def _wrestler_response(wrestler: Wrestler) -> WrestlerResponse:
    weigh_in = None
    if wrestler.weigh_in is not None:
        w = wrestler.weigh_in
        weigh_in = WeighInResponse(
            weight=w.weight,
            unit=w.unit.value,
            timestamp=w.timestamp,
            weight_class=w.weight_class,
            status=w.status.value,
            type=w.type.value,
            notes=w.notes
        )
    return WrestlerResponse(
        id=wrestler.id,
        name=wrestler.name,
        team_id=wrestler.team_id,
        grade=wrestler.grade,
        weigh_in=weigh_in,
        created_at=wrestler.created_at
    )


def _competition_response(competition) -> CompetitionResponse:
    return CompetitionResponse(
        id=competition.id,
        name=competition.name,
        format=competition.format.value,
        team_ids=competition.team_ids,
        match_ids=competition.match_ids,
        status=competition.status.value,
        created_at=competition.created_at
    )


def _match_response(match: Match) -> MatchResponse:
    final_result = None
    if match.final_result is not None:
        r = match.final_result
        final_result = FinalResultResponse(
            winner=r.winner.value,
            win_type=r.win_type.value,
            my_score=r.my_score,
            opponent_score=r.opponent_score,
            duration=r.duration
        )
    return MatchResponse(
        id=match.id,
        competition_id=match.competition_id,
        bout_number=match.bout_number,
        weight_class=match.weight_class,
        my_wrestler_id=match.my_wrestler_id,
        my_team_id=match.my_team_id,
        opponent_name=match.opponent_name,
        opponent_team=match.opponent_team,
        periods=[
            PeriodResponse(number=p.number, duration=p.duration,
                           my_score=p.my_score, opponent_score=p.opponent_score)
            for p in match.periods
        ],
        current_period=match.current_period,
        current_time=match.current_time,
        my_score=match.my_score,
        opponent_score=match.opponent_score,
        is_running=match.is_running,
        status=match.status.value,
        final_result=final_result,
        video_path=match.video_path
    )


def _bout_response(bout: Bout) -> BoutResponse:
    return BoutResponse(
        position=bout.position,
        weight_class=bout.weight_class,
        choice_holder=bout.choice_holder.value,
        label=str(bout)
    )


def _dual_meet_response(dual_meet: DualMeet) -> DualMeetResponse:
    bouts = compute_bout_order(
        dual_meet.weight_classes, dual_meet.starting_weight_class, dual_meet.home_choice_parity
    )
    return DualMeetResponse(
        id=dual_meet.id,
        name=dual_meet.name,
        home_team_id=dual_meet.home_team_id,
        away_team_id=dual_meet.away_team_id,
        grade_level=dual_meet.grade_level,
        weight_classes=dual_meet.weight_classes,
        starting_weight_class=dual_meet.starting_weight_class,
        home_choice_parity=dual_meet.home_choice_parity.value,
        home_choice_weight_classes=dual_meet.home_choice_weight_classes,
        home_roster=dual_meet.home_roster,
        away_roster=dual_meet.away_roster,
        match_ids=dual_meet.match_ids,
        status=dual_meet.status.value,
        bouts=[_bout_response(b) for b in bouts],
        created_at=dual_meet.created_at
    )


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


# Weight classes
@router.get("/weight-classes")
async def get_weight_classes():
    """Weight classes for every grade level."""
    return WEIGHT_CLASSES_BY_GRADE


@router.get("/weight-classes/{grade_level}", response_model=List[int])
async def get_grade_weight_classes(grade_level: str):
    if grade_level not in WEIGHT_CLASSES_BY_GRADE:
        raise HTTPException(status_code=404, detail=f"Unknown grade level {grade_level}")
    return WEIGHT_CLASSES_BY_GRADE[grade_level]


# Teams
@router.get("/teams", response_model=List[TeamResponse])
async def get_teams(repo: WrestlingRepository = Depends(get_repository)):
    return [_team_response(t) for t in repo.get_teams()]


@router.post("/teams", response_model=TeamResponse)
async def create_team(request: TeamRequest, repo: WrestlingRepository = Depends(get_repository)):
    if not request.name.strip():
        raise HTTPException(status_code=422, detail="Team name is required")
    return _team_response(repo.create_team(request.name.strip()))


@router.patch("/teams/{team_id}", response_model=TeamResponse)
async def update_team(team_id: str, request: TeamRequest,
                      repo: WrestlingRepository = Depends(get_repository)):
    if not request.name.strip():
        raise HTTPException(status_code=422, detail="Team name is required")
    try:
        return _team_response(repo.update_team(team_id, name=request.name.strip()))
    except WrestlingMeetError as e:
        raise _http_error(e)


@router.delete("/teams/{team_id}")
async def delete_team(team_id: str, repo: WrestlingRepository = Depends(get_repository)):
    repo.delete_team(team_id)
    return {"success": True}


# Wrestlers
@router.get("/wrestlers", response_model=List[WrestlerResponse])
async def get_wrestlers(team_id: Optional[str] = None,
                        repo: WrestlingRepository = Depends(get_repository)):
    wrestlers = repo.get_wrestlers_by_team(team_id) if team_id else repo.get_wrestlers()
    return [_wrestler_response(w) for w in wrestlers]


@router.post("/wrestlers", response_model=WrestlerResponse)
async def create_wrestler(request: WrestlerRequest, repo: WrestlingRepository = Depends(get_repository)):
    try:
        repo.get_team(request.team_id)
        wrestler = repo.create_wrestler(request.name, request.team_id, request.grade)
        return _wrestler_response(wrestler)
    except WrestlingMeetError as e:
        raise _http_error(e)


@router.patch("/wrestlers/{wrestler_id}", response_model=WrestlerResponse)
async def update_wrestler(wrestler_id: str, request: WrestlerUpdate,
                          repo: WrestlingRepository = Depends(get_repository)):
    try:
        updates = request.model_dump(exclude_unset=True, exclude_none=True)
        return _wrestler_response(repo.update_wrestler(wrestler_id, **updates))
    except WrestlingMeetError as e:
        raise _http_error(e)


@router.delete("/wrestlers/{wrestler_id}")
async def delete_wrestler(wrestler_id: str, repo: WrestlingRepository = Depends(get_repository)):
    repo.delete_wrestler(wrestler_id)
    return {"success": True}


@router.post("/wrestlers/{wrestler_id}/weigh-in", response_model=WrestlerResponse)
async def weigh_in_wrestler(wrestler_id: str, request: WeighInRequest,
                            repo: WrestlingRepository = Depends(get_repository)):
    """
    Record a weigh-in for a wrestler.

    Without an explicit weight class, the smallest class of the grade level
    the wrestler makes is used.
    """
    try:
        repo.get_wrestler(wrestler_id)
        weight_class = request.weight_class
        if weight_class is None:
            classes = WEIGHT_CLASSES_BY_GRADE.get(request.grade_level)
            if classes is None:
                raise InvalidInput(f"Unknown grade level {request.grade_level}")
            weight_class = find_weight_class(request.weight, request.unit, classes)

        weigh_in = record_weigh_in(
            request.weight,
            unit=request.unit,
            weight_class=weight_class,
            weigh_in_type=request.type,
            notes=request.notes
        )
        return _wrestler_response(repo.update_wrestler(wrestler_id, weigh_in=weigh_in))
    except WrestlingMeetError as e:
        raise _http_error(e)


# Competitions
@router.get("/competitions", response_model=List[CompetitionResponse])
async def get_competitions(repo: WrestlingRepository = Depends(get_repository)):
    return [_competition_response(c) for c in repo.get_competitions()]


@router.post("/competitions", response_model=CompetitionResponse)
async def create_competition(request: CompetitionRequest,
                             repo: WrestlingRepository = Depends(get_repository)):
    if request.format == CompetitionFormat.DUAL and len(set(request.team_ids)) != 2:
        raise HTTPException(status_code=422, detail="A dual meet needs exactly two teams")
    competition = repo.create_competition(request.name, request.team_ids, request.format)
    return _competition_response(competition)


@router.patch("/competitions/{competition_id}", response_model=CompetitionResponse)
async def update_competition(competition_id: str, request: CompetitionUpdate,
                             repo: WrestlingRepository = Depends(get_repository)):
    try:
        updates = request.model_dump(exclude_unset=True, exclude_none=True)
        return _competition_response(repo.update_competition(competition_id, **updates))
    except WrestlingMeetError as e:
        raise _http_error(e)


@router.get("/competitions/{competition_id}/pairings", response_model=List[PairingResponse])
async def get_competition_pairings(competition_id: str,
                                   repo: WrestlingRepository = Depends(get_repository)):
    """Preview the possible bouts of a two-team dual competition."""
    try:
        competition = repo.get_competition(competition_id)
    except WrestlingMeetError as e:
        raise _http_error(e)

    if competition.format != CompetitionFormat.DUAL or len(competition.team_ids) != 2:
        return []

    team_a, team_b = competition.team_ids
    groups = group_wrestlers_by_weight_class(repo.get_wrestlers(), competition.team_ids)
    pairings = pair_wrestlers_for_dual(groups, team_a, team_b)
    return [
        PairingResponse(
            weight_class=str(p.weight_class),
            wrestler_a_id=p.wrestler_a.id,
            wrestler_a_name=p.wrestler_a.name,
            wrestler_b_id=p.wrestler_b.id,
            wrestler_b_name=p.wrestler_b.name
        )
        for p in pairings
    ]


# Matches
@router.get("/matches", response_model=List[MatchResponse])
async def get_matches(competition_id: Optional[str] = None,
                      repo: WrestlingRepository = Depends(get_repository)):
    matches = repo.get_matches_by_competition(competition_id) if competition_id else repo.get_matches()
    return [_match_response(m) for m in matches]


@router.post("/matches", response_model=MatchResponse)
async def create_match(request: MatchRequest, repo: WrestlingRepository = Depends(get_repository)):
    match = Match(
        id="",
        weight_class=request.weight_class,
        my_wrestler_id=request.my_wrestler_id,
        my_team_id=request.my_team_id,
        opponent_name=request.opponent_name,
        opponent_team=request.opponent_team,
        competition_id=request.competition_id,
        bout_number=request.bout_number,
        current_time=PERIOD_DURATION_SECONDS
    )
    return _match_response(repo.create_match(match))


@router.get("/matches/{match_id}", response_model=MatchResponse)
async def get_match(match_id: str, repo: WrestlingRepository = Depends(get_repository)):
    try:
        return _match_response(repo.get_match(match_id))
    except WrestlingMeetError as e:
        raise _http_error(e)


@router.patch("/matches/{match_id}", response_model=MatchResponse)
async def update_match(match_id: str, request: MatchUpdate,
                       repo: WrestlingRepository = Depends(get_repository)):
    try:
        updates = request.model_dump(exclude_unset=True, exclude_none=True)
        return _match_response(repo.update_match(match_id, **updates))
    except WrestlingMeetError as e:
        raise _http_error(e)


@router.post("/matches/{match_id}/start", response_model=MatchResponse)
async def start_match(match_id: str, repo: WrestlingRepository = Depends(get_repository)):
    try:
        controller = MatchController(repo.get_match(match_id), repository=repo)
        return _match_response(controller.start())
    except WrestlingMeetError as e:
        raise _http_error(e)


@router.post("/matches/{match_id}/timer", response_model=MatchResponse)
async def control_timer(match_id: str, request: TimerRequest,
                        repo: WrestlingRepository = Depends(get_repository)):
    try:
        controller = MatchController(repo.get_match(match_id), repository=repo)
        commands = {
            "start": controller.start_timer,
            "pause": controller.pause_timer,
            "reset": controller.reset_timer,
            "next_period": controller.next_period,
        }
        if request.command == "tick":
            controller.tick(request.seconds)
        elif request.command in commands:
            commands[request.command]()
        else:
            raise InvalidInput(f"Unknown timer command {request.command}")
        return _match_response(controller.match)
    except WrestlingMeetError as e:
        raise _http_error(e)


@router.post("/matches/{match_id}/score", response_model=MatchResponse)
async def score_match(match_id: str, request: ScoreRequest,
                      repo: WrestlingRepository = Depends(get_repository)):
    try:
        points = request.points
        if points is None:
            points = SCORING_ACTIONS.get(request.action.value, 0)
        controller = MatchController(repo.get_match(match_id), repository=repo)
        return _match_response(controller.add_points(request.wrestler, points, request.action))
    except WrestlingMeetError as e:
        raise _http_error(e)


@router.post("/matches/{match_id}/caution", response_model=MatchResponse)
async def caution_match(match_id: str, request: CautionRequest,
                        repo: WrestlingRepository = Depends(get_repository)):
    try:
        controller = MatchController(repo.get_match(match_id), repository=repo)
        return _match_response(controller.record_caution(request.wrestler))
    except WrestlingMeetError as e:
        raise _http_error(e)


@router.post("/matches/{match_id}/end", response_model=MatchResponse)
async def end_match(match_id: str, request: EndMatchRequest,
                    repo: WrestlingRepository = Depends(get_repository)):
    try:
        controller = MatchController(repo.get_match(match_id), repository=repo)
        return _match_response(controller.end_match(request.win_type, request.winner))
    except WrestlingMeetError as e:
        raise _http_error(e)


@router.get("/matches/{match_id}/events", response_model=List[EventLogResponse])
async def get_match_events(match_id: str, repo: WrestlingRepository = Depends(get_repository)):
    return [
        EventLogResponse(
            id=e.id,
            match_id=e.match_id,
            timestamp=e.timestamp,
            period=e.period,
            time_remaining=e.time_remaining,
            action=e.action.value,
            wrestler=e.wrestler.value if e.wrestler else None,
            points=e.points,
            my_score_after=e.my_score_after,
            opponent_score_after=e.opponent_score_after,
            description=e.description
        )
        for e in repo.get_event_logs_by_match(match_id)
    ]


# Dual meets
@router.post("/dual-meets/bout-order", response_model=List[BoutResponse])
async def preview_bout_order(request: BoutOrderRequest):
    """Bout order and choice for a weight class selection, without saving anything."""
    try:
        bouts = compute_bout_order(request.weight_classes, request.starting_weight_class, request.choice_parity)
        return [_bout_response(b) for b in bouts]
    except WrestlingMeetError as e:
        raise _http_error(e)


@router.get("/dual-meets", response_model=List[DualMeetResponse])
async def get_dual_meets(repo: WrestlingRepository = Depends(get_repository)):
    return [_dual_meet_response(d) for d in repo.get_dual_meets()]


@router.post("/dual-meets", response_model=DualMeetResponse)
async def create_dual_meet_route(request: DualMeetRequest,
                                 repo: WrestlingRepository = Depends(get_repository)):
    try:
        home_team = repo.get_team(request.home_team_id)
        away_team = repo.get_team(request.away_team_id)

        weight_classes = request.weight_classes
        if weight_classes is None:
            if request.grade_level not in WEIGHT_CLASSES_BY_GRADE:
                raise InvalidInput(f"Unknown grade level {request.grade_level}")
            weight_classes = WEIGHT_CLASSES_BY_GRADE[request.grade_level]

        dual_meet = create_dual_meet(
            home_team,
            away_team,
            weight_classes,
            request.starting_weight_class,
            request.home_choice_parity,
            name=request.name,
            grade_level=request.grade_level,
            home_roster=request.home_roster,
            away_roster=request.away_roster
        )
        repo.save_dual_meet(dual_meet)
        return _dual_meet_response(dual_meet)
    except WrestlingMeetError as e:
        raise _http_error(e)


@router.get("/dual-meets/{dual_meet_id}", response_model=DualMeetResponse)
async def get_dual_meet(dual_meet_id: str, repo: WrestlingRepository = Depends(get_repository)):
    try:
        return _dual_meet_response(repo.get_dual_meet(dual_meet_id))
    except WrestlingMeetError as e:
        raise _http_error(e)


@router.get("/dual-meets/{dual_meet_id}/bouts", response_model=List[BoutSheetResponse])
async def get_dual_meet_bouts(dual_meet_id: str, repo: WrestlingRepository = Depends(get_repository)):
    """Bout order joined with the home and away rosters."""
    try:
        rows = bout_sheet(repo.get_dual_meet(dual_meet_id))
    except WrestlingMeetError as e:
        raise _http_error(e)

    return [
        BoutSheetResponse(
            position=row.bout.position,
            weight_class=row.bout.weight_class,
            choice_holder=row.bout.choice_holder.value,
            home_wrestler_id=row.home_wrestler_id,
            away_wrestler_id=row.away_wrestler_id,
            is_forfeit=row.is_forfeit
        )
        for row in rows
    ]


@router.get("/dual-meets/{dual_meet_id}/validation", response_model=ValidationResponse)
async def validate_dual_meet(dual_meet_id: str, repo: WrestlingRepository = Depends(get_repository)):
    try:
        dual_meet = repo.get_dual_meet(dual_meet_id)
    except WrestlingMeetError as e:
        raise _http_error(e)

    report = DualMeetValidator().validate_dual_meet(dual_meet, repo.get_wrestlers())

    def _violations(violations):
        return [
            ViolationResponse(
                constraint_type=v.constraint_type,
                severity=v.severity,
                description=v.description,
                weight_classes=v.weight_classes
            )
            for v in violations
        ]

    return ValidationResponse(
        is_valid=report.is_valid,
        hard_violations=_violations(report.hard_violations),
        soft_violations=_violations(report.soft_violations)
    )


# Review
@router.get("/review/team-points", response_model=List[TeamStandingResponse])
async def get_team_points(competition_id: Optional[str] = None,
                          repo: WrestlingRepository = Depends(get_repository)):
    """Team standings from completed matches, best first."""
    matches = repo.get_matches_by_competition(competition_id) if competition_id else repo.get_matches()
    completed = [m for m in matches if m.status == MatchStatus.COMPLETED]
    standings = calculate_team_points(completed, repo.get_wrestlers(), repo.get_teams())

    return [
        TeamStandingResponse(
            team_id=s.team_id, name=s.name, wins=s.wins, losses=s.losses, points=s.points
        )
        for s in sorted(standings.values(), key=lambda s: s.points, reverse=True)
    ]

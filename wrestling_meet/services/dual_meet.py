"""
Dual meet scheduling for the Wrestling Meet Manager.

A dual meet wrestles every selected weight class once. The bout order starts
at a chosen weight class and wraps around the ascending list; choice of
starting position alternates between the two teams by bout number, with the
home team's odds/evens call evaluated against the rotated order.
"""

import uuid
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence, Union

from wrestling_meet.core.config import NO_WEIGHT_CLASS
from wrestling_meet.core.exceptions import InvalidInput
from wrestling_meet.core.logging_config import get_logger
from wrestling_meet.models import (
    Bout, BoutSheetRow, ChoiceHolder, ChoiceParity, CompetitionStatus,
    DualMeet, Pairing, Team, WeightClassKey, Wrestler
)

logger = get_logger(__name__)


def _validate_weight_classes(weight_classes: Sequence[int]) -> None:
    if weight_classes is None or len(weight_classes) == 0:
        raise InvalidInput("At least one weight class is required")

    for weight_class in weight_classes:
        # bool is an int subclass and is never a weight
        if isinstance(weight_class, bool) or not isinstance(weight_class, int):
            raise InvalidInput(f"Weight class {weight_class!r} is not an integer")
        if weight_class <= 0:
            raise InvalidInput(f"Weight class {weight_class} must be positive")

    counts = Counter(weight_classes)
    duplicates = sorted(w for w, count in counts.items() if count > 1)
    if duplicates:
        raise InvalidInput(f"Duplicate weight classes: {duplicates}")


def compute_bout_order(weight_classes: Sequence[int],
                       starting_weight_class: int,
                       choice_parity: ChoiceParity) -> List[Bout]:
    """
    Compute the bout order for a dual meet.

    Args:
        weight_classes: Distinct positive weight classes, in any order
        starting_weight_class: Weight class wrestled first; must be in weight_classes
        choice_parity: Whether the home team takes choice on odd or even bouts

    Returns:
        One Bout per weight class, numbered from 1, starting at
        starting_weight_class and wrapping around the ascending order

    Raises:
        InvalidInput: If the weight classes are empty, duplicated or not
            positive integers, the starting class is not one of them, or
            the parity is not a ChoiceParity
    """
    _validate_weight_classes(weight_classes)

    if not isinstance(choice_parity, ChoiceParity):
        raise InvalidInput(f"Choice parity must be odds or evens, got {choice_parity!r}")
    if isinstance(starting_weight_class, bool) or not isinstance(starting_weight_class, int):
        raise InvalidInput(f"Starting weight class {starting_weight_class!r} is not an integer")
    if starting_weight_class not in weight_classes:
        raise InvalidInput(
            f"Starting weight class {starting_weight_class} is not one of the selected weight classes"
        )

    ordered = sorted(weight_classes)
    start_index = ordered.index(starting_weight_class)
    rotated = ordered[start_index:] + ordered[:start_index]

    bouts = []
    for i, weight_class in enumerate(rotated):
        # Index 0, 2, 4... are bouts 1, 3, 5...
        is_even_position = i % 2 == 0
        home_choice = (
            (choice_parity == ChoiceParity.EVENS and not is_even_position)
            or (choice_parity == ChoiceParity.ODDS and is_even_position)
        )
        bouts.append(Bout(
            position=i + 1,
            weight_class=weight_class,
            choice_holder=ChoiceHolder.HOME if home_choice else ChoiceHolder.AWAY
        ))

    return bouts


def home_choice_weight_classes(bout_order: Iterable[Bout]) -> List[int]:
    """Weight classes on which the home team holds choice, in bout order."""
    return [bout.weight_class for bout in bout_order if bout.choice_holder == ChoiceHolder.HOME]


def _team_id(team: Union[Team, str]) -> str:
    return team.id if isinstance(team, Team) else team


def group_wrestlers_by_weight_class(wrestlers: Iterable[Wrestler],
                                    team_ids: Iterable[str]) -> Dict[WeightClassKey, List[Wrestler]]:
    """
    Group the weighed-in wrestlers of the given teams by weight class.

    Wrestlers without a weigh-in are left out. A weigh-in with no class
    groups under NO_WEIGHT_CLASS.
    """
    team_ids = set(team_ids)
    groups: Dict[WeightClassKey, List[Wrestler]] = {}

    for wrestler in wrestlers:
        if wrestler.team_id not in team_ids or wrestler.weigh_in is None:
            continue
        key = wrestler.weigh_in.weight_class
        if key is None:
            key = NO_WEIGHT_CLASS
        groups.setdefault(key, []).append(wrestler)

    return groups


def pair_wrestlers_for_dual(wrestlers_by_weight_class: Dict[WeightClassKey, List[Wrestler]],
                            team_a: Union[Team, str],
                            team_b: Union[Team, str]) -> List[Pairing]:
    """
    Preview the possible bouts between two teams.

    Every team A wrestler is paired with every team B wrestler at the same
    weight class. A weight class missing either team produces nothing.
    """
    team_a_id = _team_id(team_a)
    team_b_id = _team_id(team_b)

    pairings = []
    for weight_class, wrestlers in wrestlers_by_weight_class.items():
        team_a_wrestlers = [w for w in wrestlers if w.team_id == team_a_id]
        team_b_wrestlers = [w for w in wrestlers if w.team_id == team_b_id]

        for wrestler_a in team_a_wrestlers:
            for wrestler_b in team_b_wrestlers:
                pairings.append(Pairing(
                    weight_class=weight_class,
                    wrestler_a=wrestler_a,
                    wrestler_b=wrestler_b
                ))

    return pairings


def _normalize_roster(roster: Optional[Dict], weight_classes: List[int], side: str) -> Dict[int, Optional[str]]:
    normalized: Dict[int, Optional[str]] = {weight_class: None for weight_class in sorted(weight_classes)}
    if not roster:
        return normalized

    for key, wrestler_id in roster.items():
        try:
            weight_class = int(key)
        except (TypeError, ValueError):
            raise InvalidInput(f"{side} roster key {key!r} is not a weight class")
        if weight_class not in normalized:
            raise InvalidInput(f"{side} roster has an entry for unselected weight class {weight_class}")
        normalized[weight_class] = wrestler_id or None

    return normalized


def create_dual_meet(home_team: Union[Team, str],
                     away_team: Union[Team, str],
                     weight_classes: Sequence[int],
                     starting_weight_class: int,
                     home_choice_parity: ChoiceParity,
                     name: str = "",
                     grade_level: str = "high-school",
                     home_roster: Optional[Dict] = None,
                     away_roster: Optional[Dict] = None,
                     dual_meet_id: Optional[str] = None) -> DualMeet:
    """
    Assemble a dual meet record.

    The home choice list is derived from the bout order so the stored record
    always agrees with it. Rosters cover every weight class; unfilled
    classes are forfeits.

    Raises:
        InvalidInput: On any invalid scheduling input, identical teams, or a
            roster entry for a weight class that is not wrestled
    """
    home_team_id = _team_id(home_team)
    away_team_id = _team_id(away_team)
    if not home_team_id or not away_team_id:
        raise InvalidInput("Both a home and an away team are required")
    if home_team_id == away_team_id:
        raise InvalidInput("Home and away team must be different")

    bout_order = compute_bout_order(weight_classes, starting_weight_class, home_choice_parity)

    if not name.strip():
        home_name = home_team.name if isinstance(home_team, Team) else home_team_id
        away_name = away_team.name if isinstance(away_team, Team) else away_team_id
        name = f"{home_name} vs {away_name}"

    dual_meet = DualMeet(
        id=dual_meet_id or str(uuid.uuid4()),
        name=name.strip(),
        home_team_id=home_team_id,
        away_team_id=away_team_id,
        weight_classes=sorted(weight_classes),
        starting_weight_class=starting_weight_class,
        home_choice_parity=home_choice_parity,
        grade_level=grade_level,
        home_choice_weight_classes=home_choice_weight_classes(bout_order),
        home_roster=_normalize_roster(home_roster, list(weight_classes), "Home"),
        away_roster=_normalize_roster(away_roster, list(weight_classes), "Away"),
        status=CompetitionStatus.SETUP
    )

    logger.info(
        "Created dual meet %s: %d bouts starting at %d, home takes %s",
        dual_meet.name, len(bout_order), starting_weight_class, home_choice_parity.value
    )
    return dual_meet


def bout_sheet(dual_meet: DualMeet) -> List[BoutSheetRow]:
    """Join the dual meet's bout order with both rosters."""
    bout_order = compute_bout_order(
        dual_meet.weight_classes,
        dual_meet.starting_weight_class,
        dual_meet.home_choice_parity
    )
    return [
        BoutSheetRow(
            bout=bout,
            home_wrestler_id=dual_meet.home_roster.get(bout.weight_class),
            away_wrestler_id=dual_meet.away_roster.get(bout.weight_class)
        )
        for bout in bout_order
    ]

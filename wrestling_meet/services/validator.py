"""
Dual meet validation module for the Wrestling Meet Manager.
Validates a dual meet setup against hard constraints (must hold before the
meet can run) and soft constraints (worth flagging to the coaches).
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from wrestling_meet.core.exceptions import InvalidInput
from wrestling_meet.core.logging_config import get_logger
from wrestling_meet.models import (
    Bout, DualMeet, ValidationReport, Violation, WeighInStatus, Wrestler
)
from wrestling_meet.services.dual_meet import compute_bout_order, home_choice_weight_classes

logger = get_logger(__name__)


class DualMeetValidator:
    """
    Validates dual meet setups.
    Checks both hard constraints (must be satisfied) and soft constraints (warnings).
    """

    def validate_dual_meet(self, dual_meet: DualMeet,
                           wrestlers: Iterable[Wrestler] = ()) -> ValidationReport:
        """
        Validate a dual meet against all constraints.

        Args:
            dual_meet: The dual meet to validate
            wrestlers: Known wrestlers, used to check roster entries

        Returns:
            ValidationReport with all violations found
        """
        report = ValidationReport(is_valid=True)
        wrestlers_by_id = {w.id: w for w in wrestlers}

        self._check_teams(dual_meet, report)
        bout_order = self._check_bout_order(dual_meet, report)
        if bout_order is not None:
            self._check_home_choice(dual_meet, bout_order, report)
        self._check_roster_weight_classes(dual_meet, report)
        self._check_roster_teams(dual_meet, wrestlers_by_id, report)
        self._check_double_entries(dual_meet, report)
        self._check_forfeits(dual_meet, report)
        self._check_weigh_ins(dual_meet, wrestlers_by_id, report)

        logger.info(
            "Validated dual meet %s: valid=%s hard=%d soft=%d",
            dual_meet.name, report.is_valid,
            len(report.hard_violations), len(report.soft_violations)
        )
        for violation in report.hard_violations[:10]:  # Show first 10
            logger.warning("  - %s: %s", violation.constraint_type, violation.description)

        return report

    def _check_teams(self, dual_meet: DualMeet, report: ValidationReport):
        """A dual meet is between two different teams."""
        if dual_meet.home_team_id == dual_meet.away_team_id:
            report.add_violation(Violation(
                constraint_type="same_team",
                severity="hard",
                description=f"Team {dual_meet.home_team_id} is both home and away"
            ))

    def _check_bout_order(self, dual_meet: DualMeet, report: ValidationReport) -> Optional[List[Bout]]:
        """Recompute the bout order and verify it covers every weight class once, alternating choice."""
        try:
            bout_order = compute_bout_order(
                dual_meet.weight_classes,
                dual_meet.starting_weight_class,
                dual_meet.home_choice_parity
            )
        except InvalidInput as e:
            report.add_violation(Violation(
                constraint_type="invalid_bout_order",
                severity="hard",
                description=str(e),
                weight_classes=list(dual_meet.weight_classes or [])
            ))
            return None

        for problem in bout_order_problems(bout_order, dual_meet.weight_classes, dual_meet.starting_weight_class):
            report.add_violation(Violation(
                constraint_type="invalid_bout_order",
                severity="hard",
                description=problem
            ))
        return bout_order

    def _check_home_choice(self, dual_meet: DualMeet, bout_order: List[Bout], report: ValidationReport):
        """The stored home choice list must agree with the bout order."""
        expected = home_choice_weight_classes(bout_order)
        if sorted(dual_meet.home_choice_weight_classes) != sorted(expected):
            report.add_violation(Violation(
                constraint_type="home_choice_mismatch",
                severity="hard",
                description=f"Home choice weight classes {dual_meet.home_choice_weight_classes} "
                            f"do not match the bout order {expected}",
                weight_classes=expected
            ))

    def _check_roster_weight_classes(self, dual_meet: DualMeet, report: ValidationReport):
        """Roster entries must refer to weight classes that are wrestled."""
        selected = set(dual_meet.weight_classes or [])
        for side, roster in (("home", dual_meet.home_roster), ("away", dual_meet.away_roster)):
            unknown = sorted(w for w in roster if w not in selected)
            if unknown:
                report.add_violation(Violation(
                    constraint_type="unknown_weight_class",
                    severity="hard",
                    description=f"{side.title()} roster has entries for unselected weight classes {unknown}",
                    weight_classes=unknown
                ))

    def _check_roster_teams(self, dual_meet: DualMeet, wrestlers_by_id: Dict[str, Wrestler],
                            report: ValidationReport):
        """Rostered wrestlers must belong to the team that enters them."""
        if not wrestlers_by_id:
            return

        for team_id, roster in ((dual_meet.home_team_id, dual_meet.home_roster),
                                (dual_meet.away_team_id, dual_meet.away_roster)):
            for weight_class, wrestler_id in roster.items():
                if wrestler_id is None:
                    continue
                wrestler = wrestlers_by_id.get(wrestler_id)
                if wrestler is None:
                    report.add_violation(Violation(
                        constraint_type="unknown_wrestler",
                        severity="hard",
                        description=f"Wrestler {wrestler_id} at {weight_class} does not exist",
                        weight_classes=[weight_class]
                    ))
                elif wrestler.team_id != team_id:
                    report.add_violation(Violation(
                        constraint_type="wrong_team",
                        severity="hard",
                        description=f"{wrestler.name} at {weight_class} is not on team {team_id}",
                        weight_classes=[weight_class]
                    ))

    def _check_double_entries(self, dual_meet: DualMeet, report: ValidationReport):
        """A wrestler can only be entered at one weight class."""
        for side, roster in (("home", dual_meet.home_roster), ("away", dual_meet.away_roster)):
            entries = defaultdict(list)
            for weight_class, wrestler_id in roster.items():
                if wrestler_id is not None:
                    entries[wrestler_id].append(weight_class)

            for wrestler_id, weight_classes in entries.items():
                if len(weight_classes) > 1:
                    report.add_violation(Violation(
                        constraint_type="double_entry",
                        severity="hard",
                        description=f"{side.title()} wrestler {wrestler_id} entered at {sorted(weight_classes)}",
                        weight_classes=sorted(weight_classes)
                    ))

    def _check_forfeits(self, dual_meet: DualMeet, report: ValidationReport):
        """Flag weight classes a team leaves open."""
        for side, roster in (("home", dual_meet.home_roster), ("away", dual_meet.away_roster)):
            open_classes = sorted(
                w for w in (dual_meet.weight_classes or []) if roster.get(w) is None
            )
            if open_classes:
                report.add_violation(Violation(
                    constraint_type="forfeit",
                    severity="soft",
                    description=f"{side.title()} team forfeits {len(open_classes)} weight class(es)",
                    weight_classes=open_classes
                ))

    def _check_weigh_ins(self, dual_meet: DualMeet, wrestlers_by_id: Dict[str, Wrestler],
                         report: ValidationReport):
        """Flag rostered wrestlers who have not made weight."""
        for roster in (dual_meet.home_roster, dual_meet.away_roster):
            for weight_class, wrestler_id in roster.items():
                wrestler = wrestlers_by_id.get(wrestler_id) if wrestler_id else None
                if wrestler is None:
                    continue

                weigh_in = wrestler.weigh_in
                if weigh_in is None or weigh_in.status == WeighInStatus.PENDING:
                    report.add_violation(Violation(
                        constraint_type="weigh_in_pending",
                        severity="soft",
                        description=f"{wrestler.name} has no weigh-in for {weight_class}",
                        weight_classes=[weight_class]
                    ))
                elif weigh_in.status == WeighInStatus.OVER:
                    report.add_violation(Violation(
                        constraint_type="over_weight",
                        severity="soft",
                        description=f"{wrestler.name} weighed in over at {weigh_in.weight} {weigh_in.unit.value}",
                        weight_classes=[weight_class]
                    ))


def bout_order_problems(bout_order: List[Bout], weight_classes: Iterable[int],
                        starting_weight_class: int) -> List[str]:
    """
    Describe every way a bout order breaks its invariants.

    An empty list means the order has one bout per weight class, starts at
    the starting class, is a rotation of the ascending order, numbers bouts
    from 1 and alternates choice between the teams.
    """
    problems = []
    ordered = sorted(weight_classes)

    if len(bout_order) != len(ordered):
        problems.append(f"Bout order has {len(bout_order)} bouts for {len(ordered)} weight classes")
        return problems

    if sorted(b.weight_class for b in bout_order) != ordered:
        problems.append("Bout order does not cover every weight class exactly once")

    if bout_order and bout_order[0].weight_class != starting_weight_class:
        problems.append(f"Bout 1 is {bout_order[0].weight_class}, expected {starting_weight_class}")

    if ordered and starting_weight_class in ordered:
        start_index = ordered.index(starting_weight_class)
        rotated = ordered[start_index:] + ordered[:start_index]
        if [b.weight_class for b in bout_order] != rotated:
            problems.append("Bout order is not a rotation of the ascending weight classes")

    for i, bout in enumerate(bout_order):
        if bout.position != i + 1:
            problems.append(f"Bout {i + 1} is numbered {bout.position}")

    for previous, current in zip(bout_order, bout_order[1:]):
        if previous.choice_holder == current.choice_holder:
            problems.append(f"Choice does not alternate between bouts {previous.position} and {current.position}")

    return problems

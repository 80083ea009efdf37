"""
Post-match review: team standings from completed bouts.
"""

from typing import Dict, Iterable

from wrestling_meet.core.config import MAJOR_DECISION_MARGIN, TEAM_POINTS
from wrestling_meet.core.logging_config import get_logger
from wrestling_meet.models import (
    FinalResult, Match, MatchSide, MatchStatus, Team, TeamStanding, WinType, Wrestler
)

logger = get_logger(__name__)


def team_points_for_win(result: FinalResult) -> int:
    """Team points the winner of a bout scores."""
    if result.win_type in (WinType.PIN, WinType.TECHNICAL_FALL, WinType.FORFEIT):
        return TEAM_POINTS[result.win_type.value]
    if result.win_type == WinType.DECISION:
        margin = abs(result.my_score - result.opponent_score)
        if margin > MAJOR_DECISION_MARGIN:
            return TEAM_POINTS["major_decision"]
        return TEAM_POINTS["decision"]
    return TEAM_POINTS["other"]


def calculate_team_points(matches: Iterable[Match],
                          wrestlers: Iterable[Wrestler],
                          teams: Iterable[Team]) -> Dict[str, TeamStanding]:
    """
    Tally wins, losses and team points for our teams.

    Only completed bouts with a final result count. The opponent side is
    not a tracked team, so an opponent win counts as a loss only.
    """
    standings = {team.id: TeamStanding(team_id=team.id, name=team.name) for team in teams}
    wrestler_teams = {w.id: w.team_id for w in wrestlers}

    for match in matches:
        if match.status != MatchStatus.COMPLETED or match.final_result is None:
            continue

        team_id = wrestler_teams.get(match.my_wrestler_id, match.my_team_id)
        standing = standings.get(team_id)
        if standing is None:
            logger.warning("Match %s belongs to unknown team %s", match.id, team_id)
            continue

        if match.final_result.winner == MatchSide.MY_WRESTLER:
            standing.wins += 1
            standing.points += team_points_for_win(match.final_result)
        else:
            standing.losses += 1

    return standings

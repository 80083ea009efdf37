"""
Live bout control: status lifecycle, period clock, scoring and event log.

A bout moves pending -> active -> completed. Scoring and the clock only run
while active; completed is terminal.
"""

from typing import List, Optional

from wrestling_meet.core.config import PERIOD_DURATION_SECONDS, SCORING_ACTIONS
from wrestling_meet.core.exceptions import InvalidInput, InvalidTransition
from wrestling_meet.core.logging_config import get_logger
from wrestling_meet.models import (
    EventAction, EventLog, FinalResult, Match, MatchSide, MatchStatus, Period, WinType
)

logger = get_logger(__name__)


def format_time(seconds: int) -> str:
    """Format seconds as m:ss."""
    seconds = max(0, int(seconds))
    return f"{seconds // 60}:{seconds % 60:02d}"


class MatchController:
    """
    Controls a single bout.

    The controller mutates its Match in place and keeps the events it logs.
    When a repository is given, the match and each event are saved as they
    change.
    """

    def __init__(self, match: Match, repository=None,
                 period_duration: int = PERIOD_DURATION_SECONDS):
        self.match = match
        self.repository = repository
        self.period_duration = period_duration
        self.events: List[EventLog] = []

    # Lifecycle
    def start(self) -> Match:
        """Move a pending bout to active."""
        if self.match.status != MatchStatus.PENDING:
            raise InvalidTransition(f"Cannot start a {self.match.status.value} match")

        self.match.status = MatchStatus.ACTIVE
        if not self.match.periods:
            self.match.periods.append(Period(number=1, duration=self.period_duration))
        self.match.current_period = self.match.periods[-1].number
        self.match.current_time = self.period_duration
        self._log(EventAction.MATCH_START, description="Match started")
        logger.info("Match %s started at %s", self.match.id, self.match.weight_class)
        return self._save()

    def end_match(self, win_type: WinType = WinType.DECISION,
                  winner: Optional[MatchSide] = None) -> Match:
        """
        Complete the bout and record the final result.

        A pending bout can only end by forfeit. Without an explicit winner
        the higher score wins; a tied score goes to the opponent.
        """
        if self.match.status == MatchStatus.COMPLETED:
            raise InvalidTransition("Match is already completed")
        if self.match.status == MatchStatus.PENDING and win_type != WinType.FORFEIT:
            raise InvalidTransition("A pending match can only end by forfeit")

        if winner is None:
            if self.match.my_score > self.match.opponent_score:
                winner = MatchSide.MY_WRESTLER
            else:
                winner = MatchSide.OPPONENT

        self.match.is_running = False
        self.match.status = MatchStatus.COMPLETED
        self.match.final_result = FinalResult(
            winner=winner,
            win_type=win_type,
            my_score=self.match.my_score,
            opponent_score=self.match.opponent_score,
            duration=format_time(self.period_duration - self.match.current_time)
        )
        self._log(EventAction.MATCH_END, wrestler=winner, description="Match ended")
        logger.info(
            "Match %s completed: %s by %s (%d-%d)",
            self.match.id, winner.value, win_type.value,
            self.match.my_score, self.match.opponent_score
        )
        return self._save()

    # Clock
    def start_timer(self) -> Match:
        self._require_active("start the timer")
        if self.match.current_time <= 0:
            raise InvalidTransition("Period clock has run out")
        self.match.is_running = True
        self._log(EventAction.PERIOD_START, description=f"Period {self.match.current_period} started")
        return self._save()

    def pause_timer(self) -> Match:
        self._require_active("pause the timer")
        self.match.is_running = False
        return self._save()

    def reset_timer(self) -> Match:
        self._require_active("reset the timer")
        self.match.is_running = False
        self.match.current_time = self.period_duration
        return self._save()

    def tick(self, seconds: int = 1) -> int:
        """Run the clock down; it stops itself at zero. Returns seconds remaining."""
        self._require_active("run the clock")
        if isinstance(seconds, bool) or not isinstance(seconds, int) or seconds <= 0:
            raise InvalidInput(f"Seconds must be a positive integer, got {seconds!r}")
        if not self.match.is_running:
            return self.match.current_time

        self.match.current_time = max(0, self.match.current_time - seconds)
        if self.match.current_time == 0:
            self.match.is_running = False
        self._save()
        return self.match.current_time

    def next_period(self) -> Match:
        self._require_active("change period")
        self.match.is_running = False
        self._log(EventAction.PERIOD_END, description=f"Period {self.match.current_period} ended")

        self.match.current_period += 1
        self.match.periods.append(Period(number=self.match.current_period, duration=self.period_duration))
        self.match.current_time = self.period_duration
        return self._save()

    # Scoring
    def add_points(self, wrestler: MatchSide, points: int, action: EventAction) -> Match:
        """Award points to one side and log the scoring action."""
        self._require_active("score")
        if action.value not in SCORING_ACTIONS:
            raise InvalidInput(f"{action.value} is not a scoring action")
        if isinstance(points, bool) or not isinstance(points, int) or points <= 0:
            raise InvalidInput(f"Points must be a positive integer, got {points!r}")

        period = self._current_period()
        if wrestler == MatchSide.MY_WRESTLER:
            self.match.my_score += points
            period.my_score += points
        else:
            self.match.opponent_score += points
            period.opponent_score += points

        name = self.match.opponent_name if wrestler == MatchSide.OPPONENT else "My wrestler"
        self._log(action, wrestler=wrestler, points=points, description=f"{name} (+{points} points)")
        return self._save()

    def record_caution(self, wrestler: MatchSide) -> Match:
        self._require_active("record a caution")
        self._log(EventAction.CAUTION, wrestler=wrestler, description="Caution")
        return self._save()

    # Internals
    def _require_active(self, what: str):
        if self.match.status != MatchStatus.ACTIVE:
            raise InvalidTransition(f"Cannot {what} on a {self.match.status.value} match")

    def _current_period(self) -> Period:
        for period in self.match.periods:
            if period.number == self.match.current_period:
                return period
        period = Period(number=self.match.current_period, duration=self.period_duration)
        self.match.periods.append(period)
        return period

    def _log(self, action: EventAction, wrestler: Optional[MatchSide] = None,
             points: int = 0, description: str = "") -> EventLog:
        event = EventLog(
            id="",
            match_id=self.match.id,
            period=self.match.current_period,
            time_remaining=self.match.current_time,
            action=action,
            points=points,
            wrestler=wrestler,
            my_score_after=self.match.my_score,
            opponent_score_after=self.match.opponent_score,
            description=description
        )
        if self.repository is not None:
            event = self.repository.add_event_log(event)
        self.events.append(event)
        return event

    def _save(self) -> Match:
        if self.repository is not None:
            self.repository.save_match(self.match)
        return self.match

"""
Data models for the wrestling meet manager.
"""

from .models import (
    ChoiceParity,
    ChoiceHolder,
    WeightUnit,
    WeighInStatus,
    WeighInType,
    CompetitionFormat,
    CompetitionStatus,
    MatchStatus,
    MatchSide,
    WinType,
    EventAction,
    WeightClassKey,
    Bout,
    Team,
    WeighIn,
    Wrestler,
    Pairing,
    Competition,
    DualMeet,
    BoutSheetRow,
    Period,
    FinalResult,
    Match,
    EventLog,
    Violation,
    ValidationReport,
    TeamStanding
)

__all__ = [
    "ChoiceParity",
    "ChoiceHolder",
    "WeightUnit",
    "WeighInStatus",
    "WeighInType",
    "CompetitionFormat",
    "CompetitionStatus",
    "MatchStatus",
    "MatchSide",
    "WinType",
    "EventAction",
    "WeightClassKey",
    "Bout",
    "Team",
    "WeighIn",
    "Wrestler",
    "Pairing",
    "Competition",
    "DualMeet",
    "BoutSheetRow",
    "Period",
    "FinalResult",
    "Match",
    "EventLog",
    "Violation",
    "ValidationReport",
    "TeamStanding"
]

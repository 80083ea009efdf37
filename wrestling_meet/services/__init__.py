"""
Services for dual meet scheduling, validation, match control, weigh-ins,
review and storage.
"""

from .dual_meet import (
    compute_bout_order,
    pair_wrestlers_for_dual,
    group_wrestlers_by_weight_class,
    home_choice_weight_classes,
    create_dual_meet,
    bout_sheet
)
from .validator import DualMeetValidator
from .match_control import MatchController
from .storage import InMemoryStore, KeyValueStore, WrestlingRepository

__all__ = [
    "compute_bout_order",
    "pair_wrestlers_for_dual",
    "group_wrestlers_by_weight_class",
    "home_choice_weight_classes",
    "create_dual_meet",
    "bout_sheet",
    "DualMeetValidator",
    "MatchController",
    "InMemoryStore",
    "KeyValueStore",
    "WrestlingRepository"
]

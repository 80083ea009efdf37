"""
Weigh-in helpers: unit conversion, made/over status and weight class lookup.
"""

from datetime import datetime
from typing import Iterable, Optional

from wrestling_meet.core.config import KG_TO_LBS
from wrestling_meet.core.exceptions import InvalidInput
from wrestling_meet.core.logging_config import get_logger
from wrestling_meet.models import WeighIn, WeighInStatus, WeighInType, WeightUnit

logger = get_logger(__name__)


def to_pounds(weight: float, unit: WeightUnit) -> float:
    """Convert a scale reading to pounds."""
    if weight is None or weight <= 0:
        raise InvalidInput(f"Weight must be positive, got {weight!r}")
    if unit == WeightUnit.KG:
        return weight * KG_TO_LBS
    return float(weight)


def weight_status(weight: float, unit: WeightUnit, weight_class: Optional[int]) -> WeighInStatus:
    """A wrestler makes weight at or under the class limit; no class means pending."""
    pounds = to_pounds(weight, unit)
    if not weight_class:
        return WeighInStatus.PENDING
    if pounds <= weight_class:
        return WeighInStatus.MADE
    return WeighInStatus.OVER


def find_weight_class(weight: float, unit: WeightUnit, weight_classes: Iterable[int]) -> Optional[int]:
    """Smallest weight class the wrestler makes, or None when over every class."""
    pounds = to_pounds(weight, unit)
    for weight_class in sorted(weight_classes):
        if pounds <= weight_class:
            return weight_class
    return None


def record_weigh_in(weight: float,
                    unit: WeightUnit = WeightUnit.LBS,
                    weight_class: Optional[int] = None,
                    weigh_in_type: WeighInType = WeighInType.COMPETITION,
                    notes: str = "",
                    timestamp: Optional[datetime] = None) -> WeighIn:
    """Build a weigh-in record with its status filled in."""
    status = weight_status(weight, unit, weight_class)
    weigh_in = WeighIn(
        weight=weight,
        unit=unit,
        timestamp=timestamp or datetime.now(),
        weight_class=weight_class,
        status=status,
        type=weigh_in_type,
        notes=notes
    )
    logger.debug("Weigh-in %.1f %s at %s: %s", weight, unit.value, weight_class, status.value)
    return weigh_in


def weight_change(weigh_in: WeighIn, weigh_out: WeighIn) -> float:
    """Pounds gained (positive) or lost (negative) between practice weigh-in and weigh-out."""
    return to_pounds(weigh_out.weight, weigh_out.unit) - to_pounds(weigh_in.weight, weigh_in.unit)

"""
Print the bout order and choice for a dual meet (CLI).
"""

import sys
import argparse
import os

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from wrestling_meet.core.config import WEIGHT_CLASSES_BY_GRADE, DEFAULT_GRADE_LEVEL
from wrestling_meet.core.exceptions import InvalidInput
from wrestling_meet.models import ChoiceParity
from wrestling_meet.services.dual_meet import compute_bout_order


def main():
    parser = argparse.ArgumentParser(
        description='Wrestling Meet Manager - Print a dual meet bout order'
    )
    parser.add_argument(
        '--grade-level',
        default=DEFAULT_GRADE_LEVEL,
        choices=sorted(WEIGHT_CLASSES_BY_GRADE),
        help='Grade level whose weight classes are wrestled'
    )
    parser.add_argument(
        '--weights',
        help='Comma separated weight classes, overrides --grade-level'
    )
    parser.add_argument(
        '--start',
        type=int,
        required=True,
        help='Weight class wrestled first'
    )
    parser.add_argument(
        '--home',
        choices=[p.value for p in ChoiceParity],
        default=ChoiceParity.ODDS.value,
        help='Bouts on which the home team has choice'
    )

    args = parser.parse_args()

    if args.weights:
        try:
            weight_classes = [int(w) for w in args.weights.split(',') if w.strip()]
        except ValueError:
            print(f"ERROR: Could not read weight classes from {args.weights!r}")
            return 1
    else:
        weight_classes = WEIGHT_CLASSES_BY_GRADE[args.grade_level]

    try:
        bouts = compute_bout_order(weight_classes, args.start, ChoiceParity(args.home))
    except InvalidInput as e:
        print(f"ERROR: {e}")
        return 1

    print("=" * 40)
    for bout in bouts:
        print(bout)
    print("=" * 40)
    return 0


if __name__ == '__main__':
    sys.exit(main())

"""
Direction codes for touchpad swipe gestures.

A direction code packs three independent bits:

    <VERTICAL?> | <POSITIVE?> | <FOUR FINGERS?>

which gives the fixed ordering left3, left4, right3, right4, up3, up4,
down3, down4. Directions follow the natural scrolling convention, so
``left3`` is three fingers moving left.
"""

from enum import IntEnum
from typing import Optional, Tuple

FOUR_FINGER_BIT = 1
POSITIVE_BIT = 2
VERTICAL_BIT = 4

# No direction emitted yet in the current session
FRESH = None


class Axis(IntEnum):
    HORIZONTAL = 0
    VERTICAL = VERTICAL_BIT


class Sign(IntEnum):
    NEGATIVE = 0
    POSITIVE = POSITIVE_BIT


class FingerClass(IntEnum):
    THREE = 0
    FOUR = FOUR_FINGER_BIT


class Direction(IntEnum):
    """One of the eight (axis, sign, finger class) swipe outcomes."""

    LEFT3 = 0   # 000
    LEFT4 = 1   # 001
    RIGHT3 = 2  # 010
    RIGHT4 = 3  # 011
    UP3 = 4     # 100
    UP4 = 5     # 101
    DOWN3 = 6   # 110
    DOWN4 = 7   # 111

    @classmethod
    def compose(cls, axis: Axis, sign: Sign, finger_class: FingerClass) -> 'Direction':
        """Build the direction code from its three components."""
        return cls(int(axis) | int(sign) | int(finger_class))

    @classmethod
    def from_label(cls, label: str) -> 'Direction':
        """Look up a direction by its label, e.g. ``'down4'``."""
        try:
            return cls[label.upper()]
        except KeyError:
            raise ValueError(f"Unknown swipe direction: {label!r}") from None

    def decompose(self) -> Tuple[Axis, Sign, FingerClass]:
        """Split the code back into (axis, sign, finger class)."""
        return (
            Axis(self & VERTICAL_BIT),
            Sign(self & POSITIVE_BIT),
            FingerClass(self & FOUR_FINGER_BIT),
        )

    def reversed(self) -> 'Direction':
        """Same axis and finger class, opposite sign."""
        return Direction(self ^ POSITIVE_BIT)

    @property
    def label(self) -> str:
        return self.name.lower()


# Labels in direction-code order, printed as "SWIPE <label>"
DIRECTION_LABELS = tuple(direction.label for direction in Direction)


def describe(direction: Optional[Direction]) -> str:
    """Human readable name for a direction or the fresh sentinel."""
    if direction is FRESH:
        return 'fresh'
    return Direction(direction).label

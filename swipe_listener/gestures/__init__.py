"""
Swipe direction codes and the swipe classification state machine.
"""

from .direction import Direction, DIRECTION_LABELS, FRESH
from .swipe_classifier import SwipeClassifier

__all__ = [
    'Direction',
    'DIRECTION_LABELS',
    'FRESH',
    'SwipeClassifier'
]

"""
Swipe classifier: turns accumulated touchpad deltas into one action per swipe.

Accumulated displacement is tested against a squared threshold. When it is
crossed the direction is resolved, and the action fires if this is the first
gesture of the session or a reversal of the previous one. Repeating the same
direction requires lifting the fingers and starting a new session.
"""

import logging
from typing import Optional, Sequence

from .direction import Axis, Direction, FingerClass, FRESH, Sign, describe

logger = logging.getLogger(__name__)

DEFAULT_FRICTION_SCALE = 0.01
DEFAULT_EPSILON = 1e-6


class SwipeClassifier:
    """Classifies a three or four finger swipe session into direction codes.
    
    ``commands`` holds eight action descriptors in direction-code order
    (left3, left4, right3, right4, up3, up4, down3, down4). When a direction
    fires, its descriptor is handed to ``dispatcher.dispatch``.
    """
    
    def __init__(self, commands: Sequence[str], dispatcher, threshold: float = 0.0,
                 friction_scale: float = DEFAULT_FRICTION_SCALE,
                 epsilon: float = DEFAULT_EPSILON,
                 three_fingers: int = 3, four_fingers: int = 4,
                 swipe_logger=None):
        if len(commands) != len(Direction):
            raise ValueError(f"Expected {len(Direction)} commands, got {len(commands)}")
        if threshold < 0:
            raise ValueError(f"Threshold must not be negative, got {threshold}")
        
        self._commands = tuple(commands)
        self.dispatcher = dispatcher
        self.swipe_logger = swipe_logger
        self._threshold = threshold
        # stores square of threshold so we skip the sqrt on every update
        self._threshold_squared = threshold * threshold
        self.friction_scale = friction_scale
        self.epsilon = epsilon
        self.three_fingers = three_fingers
        self.four_fingers = four_fingers
        
        # Session state
        self.x = 0.0
        self.y = 0.0
        self.fingers = 0
        self._previous_direction: Optional[Direction] = FRESH
        self._current_direction: Optional[Direction] = FRESH
    
    @classmethod
    def from_config(cls, config, dispatcher, swipe_logger=None) -> 'SwipeClassifier':
        """Create a classifier from a SwipeConfig."""
        return cls(
            config.commands,
            dispatcher,
            threshold=config.threshold,
            friction_scale=config.friction_scale,
            epsilon=config.epsilon,
            three_fingers=config.three_fingers,
            four_fingers=config.four_fingers,
            swipe_logger=swipe_logger,
        )
    
    @property
    def commands(self) -> tuple:
        return self._commands
    
    @property
    def threshold(self) -> float:
        return self._threshold
    
    @property
    def previous_direction(self) -> Optional[Direction]:
        """Last emitted direction, or FRESH if nothing fired this session."""
        return self._previous_direction
    
    @property
    def current_direction(self) -> Optional[Direction]:
        """Direction implied by the current accumulation, or FRESH below threshold."""
        return self._current_direction
    
    def begin(self, fingers: int = 0):
        """Start a new swipe session, discarding any pending accumulation."""
        self.x = 0.0
        self.y = 0.0
        self.fingers = fingers
        self._previous_direction = FRESH
        self._current_direction = FRESH
        if self.swipe_logger:
            self.swipe_logger.log_session_begin(fingers)
    
    def update(self, dx: float, dy: float, fingers: int):
        """Accumulate one input sample and fire an action if warranted."""
        self.x += dx
        self.y += dy
        self.fingers = fingers
        
        # Static friction: the first decision of a session needs less travel
        if self._previous_direction is FRESH:
            limit = self._threshold_squared * self.friction_scale + self.epsilon
        else:
            limit = self._threshold_squared + self.epsilon
        
        # NaN accumulation never crosses the threshold
        if not (self.x * self.x + self.y * self.y >= limit):
            self._current_direction = FRESH
            return
        
        direction = self._resolve_direction(fingers)
        self._current_direction = direction
        
        # Fire on a fresh session or on a reversal of the last gesture
        if (self._previous_direction is FRESH
                or self._previous_direction == direction.reversed()):
            self.perform_gesture(direction)
            self.x = 0.0
            self.y = 0.0
            self._previous_direction = direction
    
    def end(self):
        """Finish the swipe session. Never fires an action."""
        logger.debug(
            f"Swipe session ended: last={describe(self._previous_direction)} "
            f"pending=({self.x:.2f}, {self.y:.2f})"
        )
        if self.swipe_logger:
            self.swipe_logger.log_session_end(self.fingers, self._previous_direction)
    
    def perform_gesture(self, direction: Direction):
        """Dispatch the action mapped to a direction. Override to customize."""
        self.dispatcher.dispatch(self._commands[direction])
        if self.swipe_logger:
            self.swipe_logger.log_swipe(direction)
        else:
            print(f"SWIPE {direction.label}")
    
    def _resolve_direction(self, fingers: int) -> Direction:
        """Classify the accumulated displacement into a direction code."""
        if fingers == self.four_fingers:
            finger_class = FingerClass.FOUR
        else:
            if fingers != self.three_fingers:
                logger.debug(f"Unexpected finger count {fingers}, treating as three-finger swipe")
            finger_class = FingerClass.THREE
        
        if abs(self.x) > abs(self.y):
            axis = Axis.HORIZONTAL
            sign = Sign.NEGATIVE if self.x < 0 else Sign.POSITIVE
        else:
            # ties resolve to vertical
            axis = Axis.VERTICAL
            sign = Sign.NEGATIVE if self.y < 0 else Sign.POSITIVE
        
        return Direction.compose(axis, sign, finger_class)

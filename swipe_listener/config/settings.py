"""
Configuration settings for the swipe listener.
"""

import logging
import os
from typing import Any, Dict, List, Optional

import yaml

from ..gestures.direction import DIRECTION_LABELS, Direction
from ..gestures.swipe_classifier import DEFAULT_EPSILON, DEFAULT_FRICTION_SCALE

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a configuration value cannot be used."""


class SwipeConfig:
    """Configuration constants for touchpad swipe recognition."""
    
    # Distance (in input units) a continuing swipe must travel to fire
    THRESHOLD = 0.0
    
    # First decision of a session uses THRESHOLD^2 * FRICTION_SCALE
    FRICTION_SCALE = DEFAULT_FRICTION_SCALE
    
    # Absorbs floating point noise at rest
    EPSILON = DEFAULT_EPSILON
    
    # Finger count classes
    THREE_FINGERS = 3
    FOUR_FINGERS = 4
    
    # Key sequences, in direction-code order (see DIRECTION_LABELS)
    DEFAULT_COMMANDS = {
        'left3': 'ctrl+alt+Right',
        'left4': 'ctrl+alt+shift+Right',
        'right3': 'ctrl+alt+Left',
        'right4': 'ctrl+alt+shift+Left',
        'up3': 'ctrl+alt+Down',
        'up4': 'ctrl+alt+shift+Down',
        'down3': 'ctrl+alt+Up',
        'down4': 'ctrl+alt+shift+Up',
    }
    
    DISPATCHERS = ('xdotool', 'uinput', 'log')
    SOURCES = ('libinput', 'evdev')
    DISPATCHER = 'xdotool'
    SOURCE = 'libinput'
    
    # Use libinput's unaccelerated deltas instead of the accelerated ones
    UNACCELERATED = False
    
    DEFAULT_CONFIG_PATH = os.path.join(
        os.path.expanduser('~'), '.config', 'swipe-listener', 'config.yml'
    )
    
    def __init__(self):
        self.threshold = self.THRESHOLD
        self.friction_scale = self.FRICTION_SCALE
        self.epsilon = self.EPSILON
        self.three_fingers = self.THREE_FINGERS
        self.four_fingers = self.FOUR_FINGERS
        self.gestures = dict(self.DEFAULT_COMMANDS)
        self.dispatcher = self.DISPATCHER
        self.source = self.SOURCE
        self.device = None
        self.unaccelerated = self.UNACCELERATED
        self.path = None
    
    @property
    def commands(self) -> List[str]:
        """Key sequences ordered by direction code."""
        return [self.gestures[label] for label in DIRECTION_LABELS]
    
    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'SwipeConfig':
        """Build a config by merging a mapping over the defaults."""
        config = cls()
        if data is None:
            return config
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")
        
        for key in ('threshold', 'friction_scale', 'epsilon'):
            if key in data:
                setattr(config, key, _non_negative(key, data[key]))
        
        fingers = data.get('fingers') or {}
        if not isinstance(fingers, dict):
            raise ConfigError("'fingers' must be a mapping with 'three' and 'four'")
        config.three_fingers = _finger_count('three', fingers.get('three', config.three_fingers))
        config.four_fingers = _finger_count('four', fingers.get('four', config.four_fingers))
        if config.three_fingers == config.four_fingers:
            raise ConfigError(f"Finger classes must differ, both are {config.three_fingers}")
        
        gestures = data.get('gestures') or {}
        if not isinstance(gestures, dict):
            raise ConfigError("'gestures' must map gesture names to key sequences")
        for label, command in gestures.items():
            try:
                direction = Direction.from_label(str(label))
            except ValueError:
                raise ConfigError(
                    f"Unknown gesture '{label}', expected one of {', '.join(DIRECTION_LABELS)}"
                ) from None
            config.gestures[direction.label] = '' if command is None else str(command)
        
        config.dispatcher = _choice('dispatcher', data.get('dispatcher', config.dispatcher), cls.DISPATCHERS)
        config.source = _choice('source', data.get('source', config.source), cls.SOURCES)
        config.device = data.get('device', config.device)
        config.unaccelerated = _flag('unaccelerated', data.get('unaccelerated', config.unaccelerated))
        return config
    
    def to_dict(self) -> Dict[str, Any]:
        """Serialize the config in the layout read by from_dict."""
        return {
            'threshold': self.threshold,
            'friction_scale': self.friction_scale,
            'epsilon': self.epsilon,
            'fingers': {'three': self.three_fingers, 'four': self.four_fingers},
            'dispatcher': self.dispatcher,
            'source': self.source,
            'device': self.device,
            'unaccelerated': self.unaccelerated,
            'gestures': {label: self.gestures[label] for label in DIRECTION_LABELS},
        }


def _non_negative(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"'{name}' must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"'{name}' must be a number, got {value!r}") from None
    if number < 0:
        raise ConfigError(f"'{name}' must not be negative, got {number}")
    return number


def _flag(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"'{name}' must be true or false, got {value!r}")
    return value


def _finger_count(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"Finger class '{name}' must be a positive integer, got {value!r}")
    return value


def _choice(name: str, value: Any, choices) -> str:
    if value not in choices:
        raise ConfigError(f"'{name}' must be one of {', '.join(choices)}, got {value!r}")
    return value


def load_config(path: Optional[str] = None) -> SwipeConfig:
    """Load a YAML config file, falling back to defaults.
    
    A missing file is only an error when the path was given explicitly.
    """
    explicit = path is not None
    path = path or SwipeConfig.DEFAULT_CONFIG_PATH
    
    if not os.path.exists(path):
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        logger.info(f"No config at {path}, using defaults")
        return SwipeConfig()
    
    try:
        with open(path, 'r') as fp:
            data = yaml.safe_load(fp)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    
    config = SwipeConfig.from_dict(data)
    config.path = path
    logger.info(f"Loaded config from {path}")
    return config


def save_config(config: SwipeConfig, path: Optional[str] = None) -> str:
    """Write a config to YAML and return the path written."""
    path = path or config.path or SwipeConfig.DEFAULT_CONFIG_PATH
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, 'w') as fp:
        yaml.safe_dump(config.to_dict(), fp, sort_keys=False)
    return path

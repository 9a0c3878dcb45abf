"""
Dispatchers that turn resolved swipe directions into OS-level actions.
"""

from .dispatcher import (
    ActionDispatcher,
    LogDispatcher,
    UInputDispatcher,
    XdotoolDispatcher,
    create_dispatcher,
    parse_key_sequence,
)

__all__ = [
    'ActionDispatcher',
    'LogDispatcher',
    'UInputDispatcher',
    'XdotoolDispatcher',
    'create_dispatcher',
    'parse_key_sequence',
]

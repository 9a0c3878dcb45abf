"""
Utilities package for swipe output and logging setup.
"""

from .logger import SwipeLogger, configure_logging

__all__ = [
    'SwipeLogger',
    'configure_logging'
]

"""
Swipe Listener Package
Turns three and four finger touchpad swipes into keyboard shortcuts.
"""

from .core.listener import SwipeListener
from .gestures.swipe_classifier import SwipeClassifier
from .device.device_manager import DeviceManager

__version__ = "1.0.0"
__all__ = ["SwipeListener", "SwipeClassifier", "DeviceManager"]

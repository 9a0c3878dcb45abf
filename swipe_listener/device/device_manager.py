"""
Device management for touchpad discovery.
"""

import evdev
from evdev import ecodes
import logging
from typing import List, Optional

logger = logging.getLogger(__name__)


def is_touchpad(device) -> bool:
    """A multitouch device that can report three-finger contact."""
    caps = device.capabilities()
    abs_codes = [code for code, _ in caps.get(ecodes.EV_ABS, [])]
    key_codes = caps.get(ecodes.EV_KEY, [])
    return ecodes.ABS_MT_SLOT in abs_codes and ecodes.BTN_TOOL_TRIPLETAP in key_codes


class DeviceManager:
    """Manages touchpad device discovery."""
    
    def __init__(self, path: Optional[str] = None):
        self.path = path
        self.device = None
        self.width = 0
        self.height = 0
    
    def list_touchpads(self) -> List[evdev.InputDevice]:
        """Return every input device that looks like a multitouch touchpad."""
        touchpads = []
        for path in evdev.list_devices():
            try:
                device = evdev.InputDevice(path)
            except OSError as e:
                logger.debug(f"Skipping {path}: {e}")
                continue
            if is_touchpad(device):
                touchpads.append(device)
            else:
                device.close()
        return touchpads
    
    def find_device(self):
        """Find and configure the touchpad device."""
        if self.path:
            try:
                candidates = [evdev.InputDevice(self.path)]
            except OSError as e:
                logger.error(f"Cannot open {self.path}: {e}")
                return None
        else:
            candidates = self.list_touchpads()
        
        for device in candidates:
            abs_info = dict(device.capabilities().get(ecodes.EV_ABS, []))
            if ecodes.ABS_MT_POSITION_X in abs_info:
                self.width = abs_info[ecodes.ABS_MT_POSITION_X].max + 1
            if ecodes.ABS_MT_POSITION_Y in abs_info:
                self.height = abs_info[ecodes.ABS_MT_POSITION_Y].max + 1
            
            self.device = device
            self.path = device.path
            logger.info(f"Found touchpad: {device.name} ({device.path})")
            logger.info(f"Touchpad range: {self.width}x{self.height}")
            return device
        
        logger.error("No touchpad device found")
        return None
    
    def get_device_info(self):
        """Get device and axis range information."""
        return {
            'device': self.device,
            'name': self.device.name if self.device else None,
            'path': self.path,
            'width': self.width,
            'height': self.height,
        }
    
    def close(self):
        if self.device:
            self.device.close()
            self.device = None

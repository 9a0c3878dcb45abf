"""
Derives swipe sessions from raw multitouch evdev events.

Used when libinput's gesture stream is not available. Finger counts come from
the BTN_TOOL_*TAP keys, positions from the multitouch slots. On every
SYN_REPORT the mean per-finger movement is forwarded as one update.
"""

import logging
from typing import Dict, Optional, Tuple

from evdev import ecodes

logger = logging.getLogger(__name__)

TOOL_FINGER_COUNTS = {
    ecodes.BTN_TOOL_FINGER: 1,
    ecodes.BTN_TOOL_DOUBLETAP: 2,
    ecodes.BTN_TOOL_TRIPLETAP: 3,
    ecodes.BTN_TOOL_QUADTAP: 4,
    ecodes.BTN_TOOL_QUINTTAP: 5,
}


class EvdevSwipeTracker:
    """Feeds begin/update/end calls to a handler from evdev input events."""
    
    def __init__(self, handler, three_fingers: int = 3, four_fingers: int = 4):
        self.handler = handler
        self.finger_classes = (three_fingers, four_fingers)
        self.min_fingers = min(self.finger_classes)
        
        self.current_slot = 0
        self.slots: Dict[int, Dict[str, int]] = {}
        self.finger_count = 0
        
        # Session state
        self.active = False
        self.session_fingers = 0
        # slot -> (tracking id, x, y)
        self.last_positions: Dict[int, Tuple[Optional[int], int, int]] = {}
    
    def process(self, event):
        """Handle one evdev InputEvent."""
        if event.type == ecodes.EV_ABS:
            self._handle_abs_event(event)
        elif event.type == ecodes.EV_KEY and event.code in TOOL_FINGER_COUNTS:
            count = TOOL_FINGER_COUNTS[event.code]
            if event.value:
                self.finger_count = count
            elif self.finger_count == count:
                self.finger_count = 0
        elif event.type == ecodes.EV_SYN and event.code == ecodes.SYN_REPORT:
            self._on_frame()
    
    def _handle_abs_event(self, ev):
        if ev.code == ecodes.ABS_MT_SLOT:
            self.current_slot = ev.value
        elif ev.code == ecodes.ABS_MT_TRACKING_ID:
            if ev.value == -1:
                self.slots.pop(self.current_slot, None)
            else:
                self.slots[self.current_slot] = {'id': ev.value}
        elif ev.code == ecodes.ABS_MT_POSITION_X:
            self.slots.setdefault(self.current_slot, {})['x'] = ev.value
        elif ev.code == ecodes.ABS_MT_POSITION_Y:
            self.slots.setdefault(self.current_slot, {})['y'] = ev.value
    
    def _positions(self) -> Dict[int, Tuple[Optional[int], int, int]]:
        return {
            slot: (data.get('id'), data['x'], data['y'])
            for slot, data in self.slots.items()
            if 'x' in data and 'y' in data
        }
    
    def _on_frame(self):
        """Process a complete frame of events."""
        count = self.finger_count
        positions = self._positions()
        
        if self.active and (count < self.min_fingers or
                            (count != self.session_fingers and count in self.finger_classes)):
            self._end_session()
        
        if not self.active:
            if count in self.finger_classes:
                self.active = True
                self.session_fingers = count
                self.last_positions = positions
                logger.debug(f"evdev swipe begin: {count} fingers")
                self.handler.begin(count)
            return
        
        delta = self._mean_delta(positions)
        self.last_positions = positions
        if delta is not None:
            self.handler.update(delta[0], delta[1], self.session_fingers)
    
    def _mean_delta(self, positions) -> Optional[Tuple[float, float]]:
        # a slot reused by a new finger within one frame carries a new tracking id
        shared = [
            slot for slot in positions
            if slot in self.last_positions and self.last_positions[slot][0] == positions[slot][0]
        ]
        if not shared:
            return None
        dx = sum(positions[s][1] - self.last_positions[s][1] for s in shared) / len(shared)
        dy = sum(positions[s][2] - self.last_positions[s][2] for s in shared) / len(shared)
        return dx, dy
    
    def _end_session(self):
        logger.debug(f"evdev swipe end: {self.session_fingers} fingers")
        self.active = False
        self.session_fingers = 0
        self.last_positions = {}
        self.handler.end()
    
    def reset(self):
        """End any active session and forget all slots."""
        if self.active:
            self._end_session()
        self.slots.clear()
        self.finger_count = 0
        self.current_slot = 0

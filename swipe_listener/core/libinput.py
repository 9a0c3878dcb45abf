"""
Parser for ``libinput debug-events`` swipe gesture lines.

Typical input::

    -event7   GESTURE_SWIPE_BEGIN     +1.934s	3
     event7   GESTURE_SWIPE_UPDATE    +1.951s	3  5.00/-1.25 ( 7.14/-1.79 unaccelerated)
     event7   GESTURE_SWIPE_END       +2.012s	3
"""

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

BEGIN = 'begin'
UPDATE = 'update'
END = 'end'

_NUMBER = r'([-+]?\d+(?:\.\d+)?)'

BEGIN_RE = re.compile(r'GESTURE_SWIPE_BEGIN\s+\S+\s+(\d+)')
UPDATE_RE = re.compile(
    r'GESTURE_SWIPE_UPDATE\s+\S+\s+(\d+)\s+'
    + _NUMBER + r'/\s*' + _NUMBER
    + r'(?:\s*\(\s*' + _NUMBER + r'/\s*' + _NUMBER + r'\s+unaccelerated\))?'
)
END_RE = re.compile(r'GESTURE_SWIPE_END\s+\S+\s+(\d+)(\s+cancelled)?')


@dataclass
class SwipeEvent:
    """One swipe lifecycle notification."""
    kind: str
    fingers: int
    dx: float = 0.0
    dy: float = 0.0
    cancelled: bool = False


class LibinputParser:
    """Turns libinput debug-events output into SwipeEvents."""
    
    def __init__(self, unaccelerated: bool = False):
        self.unaccelerated = unaccelerated
    
    def parse_line(self, line: str) -> Optional[SwipeEvent]:
        """Parse one line; returns None for anything that is not a swipe."""
        if 'GESTURE_SWIPE' not in line:
            return None
        
        match = UPDATE_RE.search(line)
        if match:
            fingers, dx, dy, udx, udy = match.groups()
            if self.unaccelerated and udx is not None:
                dx, dy = udx, udy
            return SwipeEvent(UPDATE, int(fingers), float(dx), float(dy))
        
        match = BEGIN_RE.search(line)
        if match:
            return SwipeEvent(BEGIN, int(match.group(1)))
        
        match = END_RE.search(line)
        if match:
            return SwipeEvent(END, int(match.group(1)), cancelled=bool(match.group(2)))
        
        return None
    
    def parse(self, lines: Iterable[str]) -> Iterator[SwipeEvent]:
        """Parse a stream of lines, skipping everything that is not a swipe."""
        for line in lines:
            event = self.parse_line(line)
            if event is not None:
                yield event


def feed(handler, event: SwipeEvent):
    """Route a SwipeEvent to a session handler's begin/update/end."""
    if event.kind == BEGIN:
        handler.begin(event.fingers)
    elif event.kind == UPDATE:
        handler.update(event.dx, event.dy, event.fingers)
    elif event.kind == END:
        handler.end()

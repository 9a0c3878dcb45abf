"""
Logging utilities for swipe sessions and gestures.
"""

import datetime
import logging
from typing import Optional

from ..gestures.direction import Direction, describe

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False):
    """Set up root logging for the command line tools."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


def _timestamp() -> str:
    return datetime.datetime.now().strftime("%H:%M:%S.%f")[:-3]


class SwipeLogger:
    """Handles console output of swipes and an optional debug trace."""
    
    def __init__(self, debug_file: Optional[str] = None, show_timestamp: bool = True):
        self.show_timestamp = show_timestamp
        self.debug_file = None
        self.swipe_count = 0
        if debug_file:
            try:
                self.debug_file = open(debug_file, 'w')
                self.debug_file.write(f"Debug logging started at {datetime.datetime.now()}\n")
                self.debug_file.flush()
            except OSError as e:
                logger.warning(f"Could not open debug file {debug_file}: {e}")
    
    def log_swipe(self, direction: Direction):
        """Print one line for an emitted swipe."""
        self.swipe_count += 1
        line = f"SWIPE {direction.label}"
        if self.show_timestamp:
            print(f"[{_timestamp()}] {line}", flush=True)
        else:
            print(line, flush=True)
        self._debug(line)
    
    def log_session_begin(self, fingers: int):
        """Record the start of a swipe session."""
        self._debug(f"BEGIN {fingers} finger(s)")
    
    def log_session_end(self, fingers: int, last_direction: Optional[Direction]):
        """Record the end of a swipe session."""
        self._debug(f"END {fingers} finger(s), last gesture: {describe(last_direction)}")
    
    def _debug(self, message: str):
        if not self.debug_file:
            return
        try:
            self.debug_file.write(f"[{_timestamp()}] {message}\n")
            self.debug_file.flush()
        except (OSError, ValueError) as e:
            logger.warning(f"Debug file write failed: {e}")
            self.close()
    
    def close(self):
        """Close the debug file."""
        if self.debug_file:
            self.debug_file.close()
            self.debug_file = None

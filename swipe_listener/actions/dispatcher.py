"""
Action dispatchers: execute the key sequence mapped to a swipe direction.

Dispatch failures are logged and reported as ``False``; they never propagate
into the swipe classifier.
"""

import logging
import shutil
import subprocess
from typing import List, Optional

from evdev import UInput, ecodes

from ..config.settings import ConfigError

logger = logging.getLogger(__name__)

# xdotool spellings that do not map to KEY_<NAME> directly
KEY_ALIASES = {
    'ctrl': 'LEFTCTRL',
    'control': 'LEFTCTRL',
    'alt': 'LEFTALT',
    'shift': 'LEFTSHIFT',
    'super': 'LEFTMETA',
    'meta': 'LEFTMETA',
    'win': 'LEFTMETA',
    'page_up': 'PAGEUP',
    'prior': 'PAGEUP',
    'page_down': 'PAGEDOWN',
    'next': 'PAGEDOWN',
    'return': 'ENTER',
    'escape': 'ESC',
}


class ActionDispatcher:
    """Executes an action descriptor. Subclasses implement dispatch()."""
    
    name = 'base'
    
    def dispatch(self, action: str) -> bool:
        raise NotImplementedError
    
    def close(self):
        """Release any resources held by the dispatcher."""


class LogDispatcher(ActionDispatcher):
    """Dry-run dispatcher that only logs the action."""
    
    name = 'log'
    
    def dispatch(self, action: str) -> bool:
        logger.info(f"Would send keys: {action or '<none>'}")
        return True


class XdotoolDispatcher(ActionDispatcher):
    """Send key sequences to the focused window with xdotool."""
    
    name = 'xdotool'
    
    def __init__(self, binary: str = 'xdotool', timeout: float = 2.0):
        self.binary = binary
        self.timeout = timeout
    
    def dispatch(self, action: str) -> bool:
        if not action:
            logger.debug("Empty action, nothing to send")
            return False
        
        try:
            result = subprocess.run(
                [self.binary, 'key', '--clearmodifiers', *action.split()],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            logger.warning(f"{self.binary} not found, cannot send '{action}'")
            return False
        except subprocess.TimeoutExpired:
            logger.warning(f"{self.binary} timed out sending '{action}'")
            return False
        
        if result.returncode != 0:
            logger.warning(f"{self.binary} failed: {result.stderr.decode().strip()}")
            return False
        return True
    
    @staticmethod
    def available(binary: str = 'xdotool') -> bool:
        return shutil.which(binary) is not None


def parse_key_sequence(sequence: str) -> List[List[int]]:
    """Convert an xdotool-style sequence into evdev key code chords.
    
    ``"super+Right ctrl+w"`` becomes
    ``[[KEY_LEFTMETA, KEY_RIGHT], [KEY_LEFTCTRL, KEY_W]]``.
    """
    chords = []
    for chord in sequence.split():
        codes = []
        for name in chord.split('+'):
            if not name:
                raise ConfigError(f"Empty key name in '{sequence}'")
            key = KEY_ALIASES.get(name.lower(), name.upper())
            code = ecodes.ecodes.get(f"KEY_{key}")
            if code is None:
                raise ConfigError(f"Unknown key '{name}' in '{sequence}'")
            codes.append(code)
        chords.append(codes)
    return chords


class UInputDispatcher(ActionDispatcher):
    """Synthesize key chords through a virtual uinput keyboard."""
    
    name = 'uinput'
    
    def __init__(self, commands: Optional[List[str]] = None, device_name: str = 'swipe-listener'):
        keys = set()
        for command in commands or []:
            for chord in parse_key_sequence(command):
                keys.update(chord)
        # Without a command list, allow every key evdev knows
        if not keys:
            keys = set(ecodes.keys.keys()) & set(range(ecodes.KEY_ESC, ecodes.KEY_MICMUTE + 1))
        self.device = UInput({ecodes.EV_KEY: sorted(keys)}, name=device_name)
    
    def dispatch(self, action: str) -> bool:
        if not action:
            logger.debug("Empty action, nothing to send")
            return False
        
        try:
            chords = parse_key_sequence(action)
        except ConfigError as e:
            logger.warning(str(e))
            return False
        
        try:
            for chord in chords:
                for code in chord:
                    self.device.write(ecodes.EV_KEY, code, 1)
                self.device.syn()
                for code in reversed(chord):
                    self.device.write(ecodes.EV_KEY, code, 0)
                self.device.syn()
        except OSError as e:
            logger.warning(f"uinput write failed for '{action}': {e}")
            return False
        return True
    
    def close(self):
        self.device.close()


def create_dispatcher(name: str, commands: Optional[List[str]] = None) -> ActionDispatcher:
    """Build a dispatcher by name: 'xdotool', 'uinput' or 'log'."""
    if name == 'xdotool':
        if not XdotoolDispatcher.available():
            logger.warning("xdotool not found on PATH, swipes will not send keys")
        return XdotoolDispatcher()
    if name == 'uinput':
        return UInputDispatcher(commands)
    if name == 'log':
        return LogDispatcher()
    raise ConfigError(f"Unknown dispatcher '{name}'")

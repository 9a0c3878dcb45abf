"""
Main swipe listener that coordinates the input source, classifier and output.
"""

import logging
import subprocess
import threading
from typing import Optional

from ..actions.dispatcher import ActionDispatcher, create_dispatcher
from ..config.settings import SwipeConfig
from ..device.device_manager import DeviceManager
from ..gestures.swipe_classifier import SwipeClassifier
from ..utils.logger import SwipeLogger
from .evdev_source import EvdevSwipeTracker
from .libinput import LibinputParser, feed

logger = logging.getLogger(__name__)


class SwipeListener:
    """Reads swipe sessions from libinput or evdev and drives the classifier."""
    
    def __init__(self, config: Optional[SwipeConfig] = None,
                 dispatcher: Optional[ActionDispatcher] = None,
                 swipe_logger: Optional[SwipeLogger] = None):
        self.config = config or SwipeConfig()
        self.device_manager = DeviceManager(self.config.device)
        self.dispatcher = dispatcher or create_dispatcher(self.config.dispatcher, self.config.commands)
        self.logger = swipe_logger or SwipeLogger()
        self.classifier = SwipeClassifier.from_config(self.config, self.dispatcher, self.logger)
        self.parser = LibinputParser(unaccelerated=self.config.unaccelerated)
        
        # State management
        self.running = False
        self.process = None
        self.tracker = None
        
        # Thread management
        self.thread = None
        self.state_lock = threading.Lock()
    
    def start(self) -> bool:
        """Start the swipe listener."""
        if self.config.source == 'evdev':
            if not self._open_evdev():
                return False
            target = self._evdev_loop
        else:
            if not self._spawn_libinput():
                return False
            target = self._libinput_loop
        
        self.running = True
        self._print_startup_info()
        
        self.thread = threading.Thread(target=target)
        self.thread.daemon = True
        self.thread.start()
        return True
    
    def stop(self):
        """Stop the swipe listener."""
        self.running = False
        if self.process:
            self.process.terminate()
            try:
                self.process.wait(timeout=1)
            except subprocess.TimeoutExpired:
                self.process.kill()
        if self.thread:
            self.thread.join(timeout=1)
        self.device_manager.close()
        self.dispatcher.close()
        self.logger.close()
    
    def _spawn_libinput(self) -> bool:
        command = ['libinput', 'debug-events']
        if self.config.device:
            command += ['--device', self.config.device]
        try:
            self.process = subprocess.Popen(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
            )
        except FileNotFoundError:
            print("❌ libinput not found (install libinput-tools)")
            return False
        return True
    
    def _open_evdev(self) -> bool:
        if not self.device_manager.find_device():
            print("❌ No touchpad found")
            return False
        self.tracker = EvdevSwipeTracker(
            self.classifier,
            three_fingers=self.config.three_fingers,
            four_fingers=self.config.four_fingers,
        )
        return True
    
    def _print_startup_info(self):
        """Print startup information."""
        if self.config.source == 'evdev':
            info = self.device_manager.get_device_info()
            print(f"✅ Found: {info['name']} ({info['path']})")
            print(f"📺 Touchpad: {info['width']}x{info['height']}")
        else:
            print(f"✅ Listening to libinput debug-events{' on ' + self.config.device if self.config.device else ''}")
        print(f"📏 Threshold: {self.config.threshold}")
        print(f"🎹 Dispatcher: {self.dispatcher.name}")
        print("🎯 Ready! Swipe with three or four fingers.")
    
    def _libinput_loop(self):
        """Main loop over libinput debug-events output."""
        try:
            for line in self.process.stdout:
                if not self.running:
                    break
                self.handle_line(line)
        except Exception as e:
            logging.error(f"Error in libinput loop: {e}")
        finally:
            self.running = False
    
    def _evdev_loop(self):
        """Main loop over raw evdev events."""
        try:
            for event in self.device_manager.device.read_loop():
                if not self.running:
                    break
                with self.state_lock:
                    self.tracker.process(event)
        except Exception as e:
            logging.error(f"Error in evdev loop: {e}")
        finally:
            self.running = False
    
    def handle_line(self, line: str):
        """Feed one libinput debug-events line to the classifier."""
        event = self.parser.parse_line(line)
        if event is None:
            return
        if event.cancelled:
            logger.debug("Swipe cancelled by libinput")
        with self.state_lock:
            feed(self.classifier, event)

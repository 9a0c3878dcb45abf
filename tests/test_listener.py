"""Tests for the listener that wires sources to the classifier."""

from unittest import mock

from swipe_listener.config.settings import SwipeConfig
from swipe_listener.core.listener import SwipeListener
from swipe_listener.gestures import Direction
from swipe_listener.utils.logger import SwipeLogger


def make_listener(dispatcher, **overrides):
    config = SwipeConfig.from_dict(overrides)
    return SwipeListener(config, dispatcher=dispatcher, swipe_logger=SwipeLogger(show_timestamp=False))


class TestSwipeListener:
    def test_handle_lines(self, dispatcher, capsys):
        listener = make_listener(dispatcher, threshold=5, gestures={'left4': 'super+Left'})
        lines = [
            "-event7   GESTURE_SWIPE_BEGIN     +1.000s\t4",
            " event7   GESTURE_SWIPE_UPDATE    +1.010s\t4 -1.00/ 0.00 (-1.00/ 0.00 unaccelerated)",
            " event7   GESTURE_SWIPE_UPDATE    +1.020s\t4 -1.00/ 0.00 (-1.00/ 0.00 unaccelerated)",
            " event7   GESTURE_SWIPE_END       +1.030s\t4",
        ]
        for line in lines:
            listener.handle_line(line)
        assert dispatcher.actions == ['super+Left']
        assert listener.classifier.previous_direction == Direction.LEFT4
        assert "SWIPE left4" in capsys.readouterr().out

    def test_unaccelerated_deltas(self, dispatcher):
        listener = make_listener(dispatcher, threshold=100, unaccelerated=True)
        listener.handle_line("-event7   GESTURE_SWIPE_BEGIN  +1.000s\t3")
        listener.handle_line(" event7   GESTURE_SWIPE_UPDATE +1.010s\t3  0.10/ 0.00 ( 0.00/ 2.00 unaccelerated)")
        assert listener.classifier.y == 2.0
        assert listener.classifier.x == 0.0

    def test_ignores_unrelated_lines(self, dispatcher):
        listener = make_listener(dispatcher)
        listener.handle_line(" event4   KEYBOARD_KEY  +1.000s\t*** (-1) pressed")
        assert dispatcher.actions == []

    def test_start_without_libinput(self, dispatcher, capsys):
        listener = make_listener(dispatcher)
        with mock.patch('swipe_listener.core.listener.subprocess.Popen',
                        side_effect=FileNotFoundError):
            assert listener.start() is False
        assert "libinput not found" in capsys.readouterr().out

    def test_libinput_command_uses_device(self, dispatcher):
        listener = make_listener(dispatcher, device='/dev/input/event7')
        with mock.patch('swipe_listener.core.listener.subprocess.Popen') as popen:
            popen.return_value.stdout = iter([])
            assert listener.start() is True
            listener.stop()
        assert popen.call_args[0][0] == ['libinput', 'debug-events', '--device', '/dev/input/event7']
        assert dispatcher.closed

    def test_start_without_touchpad(self, dispatcher):
        listener = make_listener(dispatcher, source='evdev')
        with mock.patch.object(listener.device_manager, 'find_device', return_value=None):
            assert listener.start() is False
        assert listener.tracker is None

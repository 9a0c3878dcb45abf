"""Tests for the libinput debug-events parser."""

import pytest

from swipe_listener.core.libinput import BEGIN, END, UPDATE, LibinputParser, SwipeEvent, feed
from swipe_listener.gestures import Direction

BEGIN_LINE = "-event7   GESTURE_SWIPE_BEGIN     +1.934s\t3"
UPDATE_LINE = " event7   GESTURE_SWIPE_UPDATE    +1.951s\t3  5.00/-1.25 ( 7.14/-1.79 unaccelerated)"
END_LINE = " event7   GESTURE_SWIPE_END       +2.012s\t3"


class TestLibinputParser:
    def test_begin(self):
        assert LibinputParser().parse_line(BEGIN_LINE) == SwipeEvent(BEGIN, 3)

    def test_update(self):
        event = LibinputParser().parse_line(UPDATE_LINE)
        assert event.kind == UPDATE
        assert event.fingers == 3
        assert (event.dx, event.dy) == (5.0, -1.25)

    def test_update_unaccelerated(self):
        event = LibinputParser(unaccelerated=True).parse_line(UPDATE_LINE)
        assert (event.dx, event.dy) == (7.14, -1.79)

    def test_update_with_padded_values(self):
        line = " event7   GESTURE_SWIPE_UPDATE  +3.100s\t4 -0.00/ 0.42 (-0.00/ 1.31 unaccelerated)"
        event = LibinputParser().parse_line(line)
        assert event.fingers == 4
        assert event.dy == pytest.approx(0.42)

    def test_update_without_unaccelerated_part(self):
        line = " event7   GESTURE_SWIPE_UPDATE  +3.100s\t4  1.50/ 2.00"
        event = LibinputParser(unaccelerated=True).parse_line(line)
        assert (event.dx, event.dy) == (1.5, 2.0)

    def test_end(self):
        event = LibinputParser().parse_line(END_LINE)
        assert event == SwipeEvent(END, 3)
        assert not event.cancelled

    def test_end_cancelled(self):
        event = LibinputParser().parse_line(END_LINE + " cancelled")
        assert event.kind == END
        assert event.cancelled

    @pytest.mark.parametrize("line", [
        " event7   POINTER_MOTION    +1.000s\t  1.00/  0.00 ( 1.00/ 0.00 unaccelerated)",
        " event7   GESTURE_PINCH_BEGIN  +1.000s\t2",
        " event7   GESTURE_HOLD_BEGIN   +1.000s\t3",
        "-event2   DEVICE_ADDED     Power Button    seat0 default group1  cap:k",
        "",
    ])
    def test_ignores_other_lines(self, line):
        assert LibinputParser().parse_line(line) is None

    def test_parse_stream(self):
        lines = [BEGIN_LINE, "noise", UPDATE_LINE, END_LINE]
        kinds = [event.kind for event in LibinputParser().parse(lines)]
        assert kinds == [BEGIN, UPDATE, END]


class TestFeed:
    def test_routes_to_handler(self, handler):
        for event in LibinputParser().parse([BEGIN_LINE, UPDATE_LINE, END_LINE]):
            feed(handler, event)
        assert handler.calls == [('begin', 3), ('update', 5.0, -1.25, 3), ('end',)]

    def test_drives_classifier(self, make_classifier, dispatcher, commands):
        classifier = make_classifier(threshold=20)
        lines = [BEGIN_LINE] + [UPDATE_LINE] * 3 + [END_LINE]
        for event in LibinputParser().parse(lines):
            feed(classifier, event)
        assert dispatcher.actions == [commands[Direction.RIGHT3]]

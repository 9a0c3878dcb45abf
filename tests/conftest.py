"""Shared fixtures for swipe listener tests."""

import pytest

from swipe_listener.actions.dispatcher import ActionDispatcher
from swipe_listener.gestures import SwipeClassifier
from swipe_listener.utils.logger import SwipeLogger

COMMANDS = [f"action-{i}" for i in range(8)]


class RecordingDispatcher(ActionDispatcher):
    """Dispatcher that remembers every action instead of sending keys."""

    name = 'recording'

    def __init__(self):
        self.actions = []
        self.closed = False

    def dispatch(self, action):
        self.actions.append(action)
        return True

    def close(self):
        self.closed = True


class RecordingHandler:
    """Session handler that records begin/update/end calls."""

    def __init__(self):
        self.calls = []

    def begin(self, fingers=0):
        self.calls.append(('begin', fingers))

    def update(self, dx, dy, fingers):
        self.calls.append(('update', dx, dy, fingers))

    def end(self):
        self.calls.append(('end',))


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture
def handler():
    return RecordingHandler()


@pytest.fixture
def make_classifier(dispatcher):
    def factory(threshold=0.0, **kwargs):
        kwargs.setdefault('swipe_logger', SwipeLogger(show_timestamp=False))
        return SwipeClassifier(COMMANDS, dispatcher, threshold=threshold, **kwargs)
    return factory


@pytest.fixture
def commands():
    return list(COMMANDS)

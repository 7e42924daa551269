"""
Shared receivers for the dispatcher tests.
"""

from typing import Any, List

import pytest

from action_dispatch.contracts.results import ActionResult


class SpyReceiver:
    """Receiver that records every call and returns a fixed result."""

    def __init__(self, actions, result: Any = True):
        self._actions = list(actions)
        self.result = result
        self.calls: List[tuple] = []

    def accepted_actions(self):
        return self._actions

    def receive_action(self, action, payload):
        self.calls.append((action, payload))
        return self.result


class PingReceiver:
    """Receiver with a static factory."""

    created = 0

    def accepted_actions(self):
        return ["ping"]

    def receive_action(self, action, payload):
        return ActionResult.ok("pong")

    @classmethod
    def create_receiver(cls):
        cls.created += 1
        return cls()


@pytest.fixture
def spy():
    def make(actions, result=True):
        return SpyReceiver(actions, result)
    return make


@pytest.fixture(autouse=True)
def reset_ping_counter():
    PingReceiver.created = 0
    yield

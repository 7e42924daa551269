from __future__ import annotations

import logging
from typing import Any, Sequence

from ..contracts.errors import ActionReceiverFailed
from ..contracts.results import describe_failure, is_success
from ..resolution.resolver import RegisteredReceiver

logger = logging.getLogger(__name__)


class ActionReceiverCaller:
    """
    Calls resolved receivers in order.

    - every receiver must report success
    - the first failure stops the chain (later receivers are not called)
    - exceptions raised by a receiver propagate as-is
    """

    def __init__(self, receivers: Sequence[RegisteredReceiver], payload: Any = None) -> None:
        self._receivers = receivers
        self._payload = payload

    @classmethod
    def with_receivers(cls, receivers: Sequence[RegisteredReceiver]) -> "ActionReceiverCaller":
        return cls(receivers)

    def set_payload(self, payload: Any) -> "ActionReceiverCaller":
        self._payload = payload
        return self

    def call(self, action: str) -> bool:
        for entry in self._receivers:
            self._call_receiver(action, entry)
        return True

    def _call_receiver(self, action: str, entry: RegisteredReceiver) -> None:
        logger.debug("Calling receiver=%s action=%s", entry.name, action)

        result = entry.receiver.receive_action(action, self._payload)
        if not is_success(result):
            raise ActionReceiverFailed(action, entry.name, describe_failure(result))

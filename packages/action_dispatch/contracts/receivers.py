from __future__ import annotations

import uuid
from typing import Any, Iterable, Optional, Protocol, runtime_checkable

from .results import ActionResult


def new_handle(prefix: str = "rcv") -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


@runtime_checkable
class Receiver(Protocol):
    """
    Handler contract.

    - declares which actions it accepts (at least one)
    - returns True / ActionResult.ok() on success, anything else is a failure
    """

    def accepted_actions(self) -> Iterable[str]:
        ...

    def receive_action(self, action: str, payload: Any) -> ActionResult[Any] | bool:
        ...


@runtime_checkable
class ReceiverCreator(Protocol):
    """
    Static factory: a class that can build its own receiver without arguments.
    """

    @classmethod
    def create_receiver(cls) -> Receiver:
        ...


def receiver_identity(receiver: Any, name: Optional[str] = None) -> str:
    """
    Diagnostic identity: type + stable handle.

    Handle precedence: registration name, then the receiver's own
    `receiver_name` attribute, then a generated one.
    Two instances of one type never share a handle unless named alike.
    """
    handle = name or getattr(receiver, "receiver_name", None) or new_handle()
    return f"{type(receiver).__qualname__}#{handle}"

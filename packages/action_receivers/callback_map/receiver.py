from __future__ import annotations

import functools
from typing import Any, Callable, Dict, List, Mapping

from action_dispatch.contracts.errors import ActionReceiverFailed, ActionTargetNotCallable, IllegalAction
from action_dispatch.contracts.receivers import new_handle, receiver_identity
from action_dispatch.contracts.results import ActionResult, describe_failure, is_success


def describe_callable(target: Callable[..., Any]) -> str:
    """
    Best-effort readable name of a callback, for failure messages.
    """
    if isinstance(target, functools.partial):
        return f"partial {describe_callable(target.func)}"

    owner = getattr(target, "__self__", None)
    name = getattr(target, "__name__", None)
    if owner is not None and name is not None:
        if isinstance(owner, type):
            return f"{owner.__qualname__}::{name}"
        return f"{type(owner).__qualname__}->{name}"

    qualname = getattr(target, "__qualname__", None)
    if qualname is not None:
        return f"function {qualname}"

    return f"object {type(target).__qualname__}"


class CallbackMapReceiver:
    """
    Receiver built from a plain mapping: action name -> callback(action, payload).

    Handy for ad-hoc handlers without a class per action.
    """

    def __init__(self, action_map: Mapping[str, Any], name: str | None = None) -> None:
        self._action_map: Dict[str, Any] = dict(action_map)
        # picked up by the resolver as this receiver's handle
        self.receiver_name = name or new_handle()

    def accepted_actions(self) -> List[str]:
        return list(self._action_map.keys())

    def receive_action(self, action: str, payload: Any) -> ActionResult[Any]:
        target = self._target(action)

        result = target(action, payload)
        if not is_success(result):
            raise ActionReceiverFailed(action, describe_callable(target), describe_failure(result))

        return result if isinstance(result, ActionResult) else ActionResult.ok()

    def _target(self, action: str) -> Callable[..., Any]:
        if action not in self._action_map:
            raise IllegalAction(action, f"Illegal action '{action}' received")

        target = self._action_map[action]
        if not callable(target):
            raise ActionTargetNotCallable(action)
        return target

    def __str__(self) -> str:
        return receiver_identity(self)

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Tuple

from ..registry.receivers import ReceiverDescriptor, ReceiverRegistry
from ..resolution.resolver import ActionResolver, RegisteredReceiver
from .caller import ActionReceiverCaller

logger = logging.getLogger(__name__)


class ActionDispatcher:
    """
    Single entry point: resolve an action, then call its receivers.
    Errors from either step reach the caller unchanged.
    """

    def __init__(
        self,
        receivers: Optional[Sequence[ReceiverDescriptor]],
        permit_ambiguous_receivers: bool = False,
        registry: Optional[ReceiverRegistry] = None,
        *,
        resolver: Optional[ActionResolver] = None,
    ) -> None:
        if resolver is not None and receivers:
            raise ValueError("Pass either receivers or a prebuilt resolver, not both")

        if resolver is None:
            resolver = ActionResolver(
                receivers,
                permit_ambiguous_receivers=permit_ambiguous_receivers,
                registry=registry,
            )
        self._resolver = resolver

    @classmethod
    def from_resolver(cls, resolver: ActionResolver) -> "ActionDispatcher":
        return cls(None, resolver=resolver)

    @property
    def resolver(self) -> ActionResolver:
        return self._resolver

    @property
    def actions(self) -> Tuple[str, ...]:
        return self._resolver.actions

    def dispatch(self, action: str, payload: Any) -> bool:
        receivers = self._resolver.resolve(action)
        logger.debug("Dispatching action=%s to %d receiver(s)", action, len(receivers))

        return ActionReceiverCaller.with_receivers(receivers).set_payload(payload).call(action)

    def resolve_action(self, action: str) -> Tuple[RegisteredReceiver, ...]:
        return self._resolver.resolve(action)

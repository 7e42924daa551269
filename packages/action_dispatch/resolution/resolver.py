from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..contracts.errors import (
    AmbiguousActionReceiver,
    ClassNotFound,
    IllegalAction,
    IllegalCallable,
    IllegalClass,
    NoAcceptedActionDefined,
    NoReceiverDefined,
)
from ..contracts.receivers import Receiver, ReceiverCreator, receiver_identity
from ..registry.receivers import ReceiverDescriptor, ReceiverFactory, ReceiverInstance, ReceiverRegistry

logger = logging.getLogger(__name__)

# values that are neither a receiver nor something that can produce one
_SCALARS = (type(None), bool, int, float, complex, bytes, bytearray, list, tuple, dict, set, frozenset)


@dataclass(frozen=True)
class RegisteredReceiver:
    name: str
    receiver: Receiver
    actions: Tuple[str, ...]

    def __str__(self) -> str:
        return self.name


def _dedupe(descriptors: Iterable[Any]) -> List[Any]:
    # identity/value equality only, first occurrence wins
    unique: List[Any] = []
    for d in descriptors:
        if not any(d is seen or _same(d, seen) for seen in unique):
            unique.append(d)
    return unique


def _same(a: Any, b: Any) -> bool:
    return type(a) is type(b) and bool(a == b)


class ActionResolver:
    """
    Validates receivers and maps every action to the receivers that accept it.

    Built once; the action map never changes afterwards.
    Construction order (first failure wins):
    dedupe -> non-empty -> validate descriptors -> instantiate
    -> accepted actions non-empty -> build map (ambiguity policy).
    """

    def __init__(
        self,
        receivers: Optional[Sequence[ReceiverDescriptor]],
        permit_ambiguous_receivers: bool = False,
        registry: Optional[ReceiverRegistry] = None,
    ) -> None:
        self._permit_ambiguous = permit_ambiguous_receivers
        self._registry = registry

        descriptors = _dedupe(receivers or ())
        if not descriptors:
            raise NoReceiverDefined("Receiver list must contain at least one receiver")

        validated = [self._validate(d) for d in descriptors]
        instantiated = [self._instantiate(d) for d in validated]
        self._receivers = tuple(self._register(receiver, name) for receiver, name in instantiated)
        self._action_map = self._build_action_map(self._receivers)

        logger.info(
            "Built action map: %d actions, %d receivers, ambiguity=%s",
            len(self._action_map),
            len(self._receivers),
            "permitted" if self._permit_ambiguous else "forbidden",
        )

    @property
    def permit_ambiguous_receivers(self) -> bool:
        return self._permit_ambiguous

    @property
    def receivers(self) -> Tuple[RegisteredReceiver, ...]:
        return self._receivers

    @property
    def actions(self) -> Tuple[str, ...]:
        return tuple(self._action_map)

    @property
    def action_map(self) -> Mapping[str, Tuple[RegisteredReceiver, ...]]:
        return self._action_map

    def resolve(self, action: str) -> Tuple[RegisteredReceiver, ...]:
        try:
            return self._action_map[action]
        except (KeyError, TypeError):
            raise IllegalAction(action) from None

    # --- construction steps ---

    def _validate(self, descriptor: Any) -> ReceiverInstance | ReceiverFactory:
        """
        Normalize a descriptor into its tagged form, checking the capability it must expose.
        """
        if isinstance(descriptor, str):
            if self._registry is None or descriptor not in self._registry:
                raise ClassNotFound(f"Receiver '{descriptor}' does not exist")
            factory = self._registry.lookup(descriptor)
            if not callable(factory.factory):
                raise IllegalClass(f"Receiver '{descriptor}' is registered with a non-callable factory")
            return factory

        if isinstance(descriptor, type):
            if not isinstance(descriptor, ReceiverCreator):
                raise IllegalClass(f"Class '{descriptor.__qualname__}' must implement 'ReceiverCreator'")
            return ReceiverFactory(factory=descriptor.create_receiver)

        if isinstance(descriptor, ReceiverFactory):
            if not callable(descriptor.factory):
                raise IllegalCallable(f"Receiver factory {descriptor.factory!r} is not callable")
            return descriptor

        if isinstance(descriptor, ReceiverInstance):
            self._check_receiver(descriptor.receiver)
            return descriptor

        if isinstance(descriptor, _SCALARS):
            raise IllegalCallable("Receiver must be an object, a factory or a registered receiver name")

        self._check_receiver(descriptor)
        return ReceiverInstance(receiver=descriptor)

    def _instantiate(self, descriptor: ReceiverInstance | ReceiverFactory) -> Tuple[Receiver, Optional[str]]:
        if isinstance(descriptor, ReceiverInstance):
            return descriptor.receiver, descriptor.name

        receiver = descriptor.factory()
        self._check_receiver(receiver)
        return receiver, descriptor.name

    def _register(self, receiver: Receiver, name: Optional[str]) -> RegisteredReceiver:
        identity = receiver_identity(receiver, name)
        declared = receiver.accepted_actions()
        if isinstance(declared, str):
            raise IllegalClass(f"Receiver '{identity}' must return a collection of action names, not a string")
        declared = tuple(declared or ())
        if any(not isinstance(a, str) for a in declared):
            raise IllegalClass(f"Receiver '{identity}' declares non-string actions: {declared!r}")
        # a receiver listing an action twice still claims it once
        actions = tuple(dict.fromkeys(declared))
        if not actions:
            raise NoAcceptedActionDefined(f"Receiver '{identity}' must accept at least one action")

        logger.debug("Registered receiver=%s actions=%s", identity, actions)
        return RegisteredReceiver(name=identity, receiver=receiver, actions=actions)

    def _build_action_map(
        self, receivers: Sequence[RegisteredReceiver]
    ) -> Mapping[str, Tuple[RegisteredReceiver, ...]]:
        action_map: Dict[str, List[RegisteredReceiver]] = {}

        for entry in receivers:
            for action in entry.actions:
                claimed = action_map.setdefault(action, [])
                if claimed and not self._permit_ambiguous:
                    raise AmbiguousActionReceiver(action, existing=claimed[0].name, conflicting=entry.name)
                claimed.append(entry)

        return MappingProxyType({action: tuple(entries) for action, entries in action_map.items()})

    @staticmethod
    def _check_receiver(obj: Any) -> None:
        if isinstance(obj, type) or not isinstance(obj, Receiver):
            raise IllegalClass(f"Class '{type(obj).__qualname__}' must implement 'Receiver'")

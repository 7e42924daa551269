from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, Union

from ..contracts.errors import ClassNotFound
from ..contracts.receivers import Receiver

ReceiverFactoryFn = Callable[[], Receiver]


@dataclass(frozen=True)
class ReceiverInstance:
    """
    Descriptor for an already constructed receiver.
    `name` becomes the receiver's diagnostic handle.
    """
    receiver: Any
    name: Optional[str] = None


@dataclass(frozen=True)
class ReceiverFactory:
    """
    Descriptor for a receiver built lazily by a zero-argument factory.
    """
    factory: Any
    name: Optional[str] = None


# str -> registry name, type -> ReceiverCreator class, anything else -> live receiver
ReceiverDescriptor = Union[ReceiverInstance, ReceiverFactory, str, type, Receiver]


class ReceiverRegistry:
    """
    In-memory name -> factory registry.
    Lets configuration refer to receivers by name without importing them.
    """

    def __init__(self) -> None:
        self._factories: Dict[str, ReceiverFactoryFn] = {}

    def register_factory(self, name: str, factory: ReceiverFactoryFn) -> None:
        self._factories[name] = factory

    def register_instance(self, name: str, receiver: Receiver) -> None:
        """
        Register a shared instance; every lookup yields the same object.
        """
        self._factories[name] = lambda: receiver

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def names(self) -> Tuple[str, ...]:
        return tuple(self._factories)

    def lookup(self, name: str) -> ReceiverFactory:
        """
        Resolve a registered name into a factory descriptor named after it.
        """
        factory = self._factories.get(name)
        if factory is None:
            raise ClassNotFound(f"Receiver '{name}' is not registered")
        return ReceiverFactory(factory=factory, name=name)

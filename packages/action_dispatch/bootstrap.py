from __future__ import annotations

from typing import Optional, Sequence

from .config.loader import DispatcherConfig
from .dispatch.dispatcher import ActionDispatcher
from .registry.receivers import ReceiverDescriptor, ReceiverRegistry


def build_dispatcher(
    cfg: DispatcherConfig,
    registry: Optional[ReceiverRegistry] = None,
    extra_receivers: Sequence[ReceiverDescriptor] = (),
) -> ActionDispatcher:
    """
    Build a dispatcher from config.
    Named receivers come from the registry, extra descriptors are appended after them.
    """
    descriptors: list[ReceiverDescriptor] = [*cfg.receivers, *extra_receivers]
    return ActionDispatcher(
        descriptors,
        permit_ambiguous_receivers=cfg.permit_ambiguous_receivers,
        registry=registry,
    )

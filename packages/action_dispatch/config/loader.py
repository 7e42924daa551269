from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"", "0", "false", "no", "off"}


@dataclass(frozen=True)
class DispatcherConfig:
    permit_ambiguous_receivers: bool = False

    # registry names, in registration order
    receivers: Tuple[str, ...] = ()


def _as_bool(key: str, value: Any) -> bool:
    # env/file blobs carry flags as strings
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise ValueError(f"Config '{key}' must be a boolean, got {value!r}")
    if value is None or isinstance(value, (bool, int)):
        return bool(value)
    raise ValueError(f"Config '{key}' must be a boolean, got {value!r}")


def load_dispatcher_config(raw: Mapping[str, Any] | None) -> DispatcherConfig:
    """
    Build a typed config from a plain mapping (file/env/db blob, caller decides).
    """
    raw = raw or {}

    names = raw.get("receivers") or ()
    if isinstance(names, str):
        names = (names,)

    return DispatcherConfig(
        permit_ambiguous_receivers=_as_bool(
            "permit_ambiguous_receivers", raw.get("permit_ambiguous_receivers", False)
        ),
        receivers=tuple(str(n) for n in names),
    )

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Generic, Literal, Mapping, Optional, TypeVar

T = TypeVar("T")

ResultStatus = Literal["ok", "error"]


@dataclass(frozen=True)
class ErrorInfo:
    code: str               # stable machine code, e.g. "render_failed"
    message: str            # safe human message
    details: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ActionResult(Generic[T]):
    """
    What a receiver reports back for one action.

    A receiver may also return a bare ``True``; every other value is a failure.
    """
    status: ResultStatus
    data: Optional[T] = None
    error: Optional[ErrorInfo] = None

    @staticmethod
    def ok(data: Any = None) -> "ActionResult[Any]":
        return ActionResult(status="ok", data=data)

    @staticmethod
    def fail(code: str, message: str, details: Mapping[str, Any] | None = None) -> "ActionResult[Any]":
        return ActionResult(
            status="error",
            error=ErrorInfo(code=code, message=message, details=dict(details or {})),
        )


def is_success(result: Any) -> bool:
    if result is True:
        return True
    return isinstance(result, ActionResult) and result.status == "ok"


def describe_failure(result: Any) -> str:
    """
    JSON form of a non-success value, for error messages.
    """
    if isinstance(result, ActionResult):
        value: Any = {"status": result.status, "error": asdict(result.error) if result.error else None}
    else:
        value = result
    try:
        return json.dumps(value, default=repr, ensure_ascii=False, sort_keys=True)
    except (TypeError, ValueError):
        # mixed or non-JSON keys, circular containers
        return repr(value)

from __future__ import annotations


class ActionDispatchError(Exception):
    pass


# --- construction faults ---

class NoReceiverDefined(ActionDispatchError):
    pass


class ClassNotFound(ActionDispatchError):
    pass


class IllegalClass(ActionDispatchError):
    pass


class IllegalCallable(ActionDispatchError):
    pass


class NoAcceptedActionDefined(ActionDispatchError):
    pass


class AmbiguousActionReceiver(ActionDispatchError):
    def __init__(self, action: str, existing: str, conflicting: str) -> None:
        super().__init__(f"Ambiguous receiver for '{action}': '{existing}', '{conflicting}'")
        self.action = action
        self.existing = existing
        self.conflicting = conflicting


# --- call faults ---

class IllegalAction(ActionDispatchError):
    def __init__(self, action: str, message: str | None = None) -> None:
        super().__init__(message or f"Illegal action '{action}'")
        self.action = action


class ActionReceiverFailed(ActionDispatchError):
    def __init__(self, action: str, receiver: str, detail: str) -> None:
        super().__init__(f"Action '{action}' receiver '{receiver}' failed: {detail}")
        self.action = action
        self.receiver = receiver
        self.detail = detail


class ActionTargetNotCallable(ActionDispatchError):
    def __init__(self, action: str) -> None:
        super().__init__(f"Action '{action}' target is not callable")
        self.action = action

from __future__ import annotations


class SmokeError(Exception):
    pass


class DiscoveryError(SmokeError):
    """Scenario root is missing or unreadable. Aborts the whole run."""


class ParseError(SmokeError):
    """Malformed scenario document or action payload."""


class UnknownActionType(SmokeError):
    def __init__(self, name: str, kind: str = "step") -> None:
        self.name = name
        self.kind = kind
        super().__init__(f"Unknown {kind} type: {name}")


class ActionTimeout(SmokeError):
    def __init__(self, label: str, timeout_ms: int | None, detail: str = "") -> None:
        self.label = label
        self.timeout_ms = timeout_ms
        msg = f"{label} timed out after {timeout_ms}ms"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class AuthenticationSetupFailure(SmokeError):
    """Session reset could not reach the post-login page."""


class SuppressedFailure(UserWarning):
    """A non-high priority scenario failed and was reported as passed."""

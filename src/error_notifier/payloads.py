from __future__ import annotations

"""Tagged alert payloads: a plain message or a fault carrying a stack trace."""

import traceback
from dataclasses import dataclass
from typing import Optional, Union

NO_STACK_TRACE = "No stack trace"


@dataclass(frozen=True)
class Message:
    """Free-form alert text."""

    text: str


@dataclass(frozen=True)
class Fault:
    """An error with its message and optional stack trace."""

    message: str
    stack: Optional[str] = None
    error_type: str = "Error"

    @classmethod
    def from_exception(cls, exc: BaseException) -> "Fault":
        """Capture *exc* together with its formatted traceback."""

        stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip("\n")
        return cls(message=str(exc), stack=stack or None, error_type=type(exc).__name__)

    def render_text(self) -> str:
        stack = self.stack if self.stack else NO_STACK_TRACE
        return f"ERROR: {self.message}\n\nSTACK TRACE:\n{stack}"


AlertPayload = Union[Message, Fault]


def as_payload(value: Union[str, BaseException, Message, Fault]) -> AlertPayload:
    """Convert caller input into a tagged payload at the API boundary."""

    if isinstance(value, (Message, Fault)):
        return value
    if isinstance(value, BaseException):
        return Fault.from_exception(value)
    return Message(str(value))


def payload_text(payload: AlertPayload) -> str:
    if isinstance(payload, Fault):
        return payload.message
    return payload.text


__all__ = [
    "AlertPayload",
    "Fault",
    "Message",
    "NO_STACK_TRACE",
    "as_payload",
    "payload_text",
]

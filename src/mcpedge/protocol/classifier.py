"""Envelope classification — request, notification, response echo, or malformed."""

from __future__ import annotations

from enum import Enum
from typing import Any


class MessageKind(str, Enum):
    """The shape of a parsed JSON-RPC message."""

    REQUEST = "request"
    NOTIFICATION = "notification"
    RESPONSE = "response"
    MALFORMED = "malformed"


def classify(message: Any) -> MessageKind:
    """Classify a decoded JSON body.

    The checks are ordered: anything carrying ``result`` or ``error`` is a
    response even if it also names a method.
    """
    if not isinstance(message, dict):
        return MessageKind.MALFORMED
    if "result" in message or "error" in message:
        return MessageKind.RESPONSE
    if "method" in message:
        if "id" in message:
            return MessageKind.REQUEST
        return MessageKind.NOTIFICATION
    return MessageKind.MALFORMED


def envelope_id(message: Any) -> Any:
    """Best-effort id to echo for *message*, ``None`` when it has none."""
    if isinstance(message, dict):
        return message.get("id")
    return None

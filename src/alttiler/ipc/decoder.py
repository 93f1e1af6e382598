"""Inbound frame decoding."""

import json

from pydantic import ValidationError

from ..errors import DecodeError
from ..models import Event


def decode(frame: str | bytes) -> Event | None:
    """Decode one websocket frame into an Event.

    Args:
        frame: Raw frame as returned by the connection

    Returns:
        The decoded Event, or None for non-text frames.

    Raises:
        DecodeError: The text is not a JSON object with an object-valued data field.
    """
    if not isinstance(frame, str):
        return None

    try:
        payload = json.loads(frame)
    except (ValueError, RecursionError) as e:
        raise DecodeError(f"invalid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise DecodeError(f"expected a JSON object, got {type(payload).__name__}")

    try:
        return Event.model_validate(payload)
    except ValidationError as e:
        raise DecodeError(f"invalid message envelope: {e.error_count()} error(s)") from e

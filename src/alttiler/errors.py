"""Error taxonomy.

Fatal errors (connection, subscription, read) end the reactor and surface as a
non-zero exit code. Recoverable errors (decode, missing field, send) are logged
and the offending message is dropped.
"""


class TilerError(Exception):
    """Base class for all alttiler errors."""


class WmConnectionError(TilerError):
    """The window manager endpoint is unreachable or the address is malformed."""


class SubscriptionError(TilerError):
    """A subscription directive could not be sent."""


class ReadError(TilerError):
    """The connection failed while waiting for the next message."""


class DecodeError(TilerError):
    """An inbound frame is not a well-formed event payload."""


class MissingFieldError(TilerError):
    """An event lacks a field its handler needs."""

    def __init__(self, field: str, event_type: str | None = None):
        self.field = field
        self.event_type = event_type
        super().__init__(f"{event_type or 'event'} is missing {field!r}")


class SendError(TilerError):
    """An outbound command could not be delivered."""


class InvalidFieldError(TilerError):
    """An event field is present but malformed."""

    def __init__(self, field: str, event_type: str | None = None, reason: str = ""):
        self.field = field
        self.event_type = event_type
        self.reason = reason
        super().__init__(f"{event_type or 'event'} has an invalid {field!r}: {reason}")

"""GlazeWM websocket client.

Owns the single connection used both for the event subscription and for
outbound commands.
"""

import asyncio
from collections.abc import Iterable

from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosed, WebSocketException

from .. import config
from ..errors import ReadError, SendError, SubscriptionError, WmConnectionError
from ..models import Command
from ..telemetry import get_logger

logger = get_logger(__name__)


class WmConnection:
    """Connection manager for the window manager IPC endpoint.

    Provides async methods for:
    - Connecting and subscribing to events
    - Reading one inbound frame at a time
    - Sending best-effort commands

    Only connect/subscribe/read failures are fatal. A failed send raises
    SendError and leaves the connection as it is.
    """

    def __init__(self, url: str | None = None, open_timeout: float | None = None):
        """Initialize WmConnection.

        Args:
            url: Websocket URL. If None, uses config.WM_URL.
            open_timeout: Handshake timeout in seconds. If None, uses config default.
        """
        self.url = url or config.WM_URL
        self._open_timeout = open_timeout or config.OPEN_TIMEOUT_SECONDS
        self._ws: ClientConnection | None = None

    @property
    def is_connected(self) -> bool:
        return self._ws is not None

    async def connect(self) -> None:
        """Open the websocket.

        Raises:
            WmConnectionError: Malformed URL, unreachable endpoint or failed handshake.
        """
        logger.info(f"[WmConnection] Connecting to {self.url}")
        try:
            self._ws = await connect(self.url, open_timeout=self._open_timeout)
        except (OSError, asyncio.TimeoutError, WebSocketException) as e:
            raise WmConnectionError(f"failed to connect to {self.url}: {e}") from e
        logger.info(f"[WmConnection] Connected to {self.url}")

    async def subscribe(self, event_names: Iterable[str] = config.SUBSCRIBE_EVENTS) -> None:
        """Send one subscription directive per event name, in order.

        Raises:
            SubscriptionError: Not connected, or any directive failed to send.
        """
        if self._ws is None:
            raise SubscriptionError("cannot subscribe: not connected")

        names = list(event_names)
        for name in names:
            command = Command.subscribe(name)
            try:
                await self._ws.send(command.text)
            except (ConnectionClosed, WebSocketException, OSError) as e:
                raise SubscriptionError(f"failed to send {command.text!r}: {e}") from e
            logger.debug(f"[WmConnection] Sent {command.text!r}")

        logger.info(f"[WmConnection] Subscribed to {', '.join(names)}")

    async def read_next(self) -> str | bytes:
        """Wait for the next inbound frame.

        Returns:
            str for text frames, bytes for binary frames.

        Raises:
            ReadError: Not connected, or the connection closed/failed.
        """
        if self._ws is None:
            raise ReadError("cannot read: not connected")
        try:
            return await self._ws.recv()
        except ConnectionClosed as e:
            raise ReadError(f"connection closed: {e}") from e
        except (WebSocketException, OSError) as e:
            raise ReadError(f"read failed: {e}") from e

    async def send(self, command: Command) -> None:
        """Send a command without waiting for the reply.

        Raises:
            SendError: Not connected, or the frame could not be written.
        """
        if self._ws is None:
            raise SendError(f"cannot send {command.text!r}: not connected")
        try:
            await self._ws.send(command.text)
        except (ConnectionClosed, WebSocketException, OSError) as e:
            raise SendError(f"failed to send {command.text!r}: {e}") from e
        logger.debug(f"[WmConnection] Sent {command.text!r}")

    async def close(self) -> None:
        """Close the websocket. Safe to call more than once."""
        ws, self._ws = self._ws, None
        if ws is None:
            return
        try:
            await ws.close()
        except (WebSocketException, OSError) as e:
            logger.debug(f"[WmConnection] Error while closing: {e}")
        logger.info("[WmConnection] Closed")

    async def __aenter__(self) -> "WmConnection":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

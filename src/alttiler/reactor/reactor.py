"""Reactor - 单任务读循环

一次只处理一帧，严格按到达顺序。每次读取都与停止信号竞争，
外部（托盘菜单、信号处理）调用 request_stop 即可结束循环。
"""

import asyncio
from typing import TYPE_CHECKING

from ..errors import DecodeError, ReadError
from ..ipc import decode
from ..telemetry import get_logger, metrics, truncate_frame
from .dispatcher import EventDispatcher
from .state import ExitCode, ReactorState

if TYPE_CHECKING:
    from ..ipc import WmConnection

logger = get_logger(__name__)


class Reactor:
    """事件循环

    Attributes:
        connection: 唯一的 WM 连接
        dispatcher: 事件分发器
        state: 当前状态
    """

    def __init__(self, connection: "WmConnection", dispatcher: EventDispatcher | None = None):
        self.connection = connection
        self.dispatcher = dispatcher or EventDispatcher(connection)
        self.state = ReactorState.AWAITING_MESSAGE
        self._stop_event = asyncio.Event()
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def stop_requested(self) -> bool:
        return self._stop_event.is_set()

    def request_stop(self) -> None:
        """请求停止（同一 event loop 内调用）"""
        self._stop_event.set()

    def request_stop_threadsafe(self) -> None:
        """请求停止（可从其他线程调用，如托盘菜单回调）"""
        if self._loop is None or self._loop.is_closed():
            self._stop_event.set()
            return
        self._loop.call_soon_threadsafe(self._stop_event.set)

    async def run(self) -> ExitCode:
        """运行读循环

        Returns:
            ExitCode.OK: application_exiting 或停止请求

        Raises:
            ReadError: 连接不可用
        """
        self._loop = asyncio.get_running_loop()
        logger.info("[Reactor] Started")
        try:
            while True:
                self.state = ReactorState.AWAITING_MESSAGE
                frame = await self._next_frame()
                if frame is None:
                    logger.info("[Reactor] Stop requested")
                    break

                if (await self._process(frame)).is_terminal:
                    break
        except ReadError as e:
            logger.error(f"[Reactor] Read failed: {e}")
            raise
        finally:
            self.state = ReactorState.SHUTDOWN
            logger.info("[Reactor] Stopped")

        return ExitCode.OK

    async def _process(self, frame: str | bytes) -> ReactorState:
        """处理一帧，返回下一个状态"""
        metrics.inc("frames.received")

        self.state = ReactorState.DECODING
        try:
            event = decode(frame)
        except DecodeError as e:
            metrics.inc("decode.errors")
            logger.warning(f"[Reactor] Skipping malformed frame: {e} | {truncate_frame(frame)}")
            return ReactorState.AWAITING_MESSAGE
        if event is None:
            return ReactorState.AWAITING_MESSAGE

        self.state = ReactorState.ROUTING
        handler = self.dispatcher.route(event)
        if handler is None:
            logger.debug(f"[Reactor] No handler for {event.event_type!r}")
            return ReactorState.AWAITING_MESSAGE

        self.state = ReactorState.HANDLING
        return await self.dispatcher.handle(handler, event)

    async def _next_frame(self) -> str | bytes | None:
        """等待下一帧或停止信号

        Returns:
            帧内容，None 表示收到停止信号
        """
        if self._stop_event.is_set():
            return None

        read_task = asyncio.ensure_future(self.connection.read_next())
        stop_task = asyncio.ensure_future(self._stop_event.wait())
        try:
            done, _ = await asyncio.wait(
                {read_task, stop_task}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            for task in (read_task, stop_task):
                if not task.done():
                    task.cancel()

        if stop_task in done:
            if read_task in done and not read_task.cancelled():
                # 同时完成时丢弃这一帧，但要取走异常
                read_task.exception()
            return None
        return read_task.result()

"""事件分发器 - 连接 Event 和 tiling 决策

层级职责：
- route: 按 eventType 选择 handler
- handle: 执行 handler，隔离可恢复错误
- handler: 提取焦点窗口 → Direction Policy → 发送命令

focus_changed 的 focusedContainer 就是焦点窗口本身；
focused_container_moved 的 focusedContainer 是更大的子树，需要先查找焦点窗口。
"""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from pydantic import ValidationError

from .. import config
from ..errors import InvalidFieldError, MissingFieldError, SendError
from ..layout import decide, find_focused_window
from ..models import Command, Container, Event
from ..telemetry import get_logger, metrics
from .state import ReactorState

if TYPE_CHECKING:
    from ..ipc import WmConnection

logger = get_logger(__name__)

# handler 类型: (event) -> 下一个状态
Handler = Callable[[Event], Awaitable[ReactorState]]


class EventDispatcher:
    """事件分发器

    职责：
    1. 按 eventType 路由
    2. 调用 Focus Resolver / Direction Policy 计算命令
    3. 通过连接发送命令
    4. 记录指标

    只有 application_exiting 会返回 SHUTDOWN；缺字段、发送失败等
    handler 级错误记录日志后回到 AWAITING_MESSAGE。
    """

    def __init__(self, connection: "WmConnection"):
        self.connection = connection
        self._handlers: dict[str, Handler] = {
            config.EVENT_FOCUS_CHANGED: self._on_focus_changed,
            config.EVENT_FOCUSED_CONTAINER_MOVED: self._on_focused_container_moved,
            config.EVENT_APPLICATION_EXITING: self._on_application_exiting,
        }

    def route(self, event: Event) -> Handler | None:
        """选择 handler

        Returns:
            handler，None 表示忽略此事件
        """
        if event.is_client_response:
            return self._on_client_response
        return self._handlers.get(event.event_type)

    async def handle(self, handler: Handler, event: Event) -> ReactorState:
        """执行 handler（带错误隔离）"""
        try:
            return await handler(event)
        except (MissingFieldError, InvalidFieldError) as e:
            metrics.inc("handler.errors", {"type": event.event_type or "unknown"})
            logger.warning(f"[Dispatcher] Skipping event: {e}")
        except SendError as e:
            metrics.inc("send.errors")
            logger.warning(f"[Dispatcher] Command not delivered: {e}")
        return ReactorState.AWAITING_MESSAGE

    async def dispatch(self, event: Event) -> ReactorState:
        """路由并处理一个事件"""
        handler = self.route(event)
        if handler is None:
            logger.debug(f"[Dispatcher] Ignoring event: {event.event_type}")
            return ReactorState.AWAITING_MESSAGE
        return await self.handle(handler, event)

    # === handlers ===

    async def _on_focus_changed(self, event: Event) -> ReactorState:
        metrics.inc("events", {"type": config.EVENT_FOCUS_CHANGED})
        window = self._focused_container(event)
        await self._apply(window)
        return ReactorState.AWAITING_MESSAGE

    async def _on_focused_container_moved(self, event: Event) -> ReactorState:
        metrics.inc("events", {"type": config.EVENT_FOCUSED_CONTAINER_MOVED})
        tree = self._focused_container(event)
        window = find_focused_window(tree)
        if window is None:
            logger.debug("[Dispatcher] No focused window in moved container")
            return ReactorState.AWAITING_MESSAGE
        await self._apply(window)
        return ReactorState.AWAITING_MESSAGE

    async def _on_application_exiting(self, event: Event) -> ReactorState:
        metrics.inc("events", {"type": config.EVENT_APPLICATION_EXITING})
        logger.info("[Dispatcher] Window manager is exiting")
        return ReactorState.SHUTDOWN

    async def _on_client_response(self, event: Event) -> ReactorState:
        # 订阅/命令回执，只关心失败
        if event.success is False:
            metrics.inc("commands.rejected")
            logger.warning(
                f"[Dispatcher] Window manager rejected {event.client_message!r}: {event.error}"
            )
        return ReactorState.AWAITING_MESSAGE

    # === helpers ===

    def _focused_container(self, event: Event) -> Container:
        """解析 data.focusedContainer

        Raises:
            MissingFieldError: 字段缺失
            InvalidFieldError: 字段存在但结构不合法
        """
        field = config.FOCUSED_CONTAINER_FIELD
        raw = event.data.get(field)
        if raw is None:
            raise MissingFieldError(field, event.event_type)
        try:
            return Container.from_payload(raw)
        except (ValidationError, ValueError) as e:
            raise InvalidFieldError(field, event.event_type, str(e)) from e

    async def _apply(self, window: Container) -> Command | None:
        """根据窗口宽高发送 tiling 命令

        Returns:
            已发送的命令，None 表示无需发送
        """
        dimensions = window.dimensions
        if dimensions is None:
            logger.debug("[Dispatcher] Focused container has no dimensions")
            return None

        command = decide(*dimensions)
        if command is None:
            logger.debug(f"[Dispatcher] Square window {dimensions}, no command")
            return None

        await self.connection.send(command)
        metrics.inc("commands.sent")
        logger.info(f"[Dispatcher] {dimensions[0]:g}x{dimensions[1]:g} -> {command}")
        return command

"""Bootstrap - 集中构造并运行 reactor

职责：
- 创建 WmConnection, EventDispatcher, Reactor
- 连接、订阅、运行读循环，始终关闭连接
- 把致命错误映射为退出码

不负责：
- 信号处理、日志初始化（由 app.main 负责）
- 托盘等外部协作者（通过 get_current_components 拿到 reactor 后调用 request_stop）
"""

from dataclasses import dataclass

from ..errors import ReadError, SubscriptionError, WmConnectionError
from ..ipc import WmConnection
from ..reactor import EventDispatcher, ExitCode, Reactor
from ..telemetry import get_logger, metrics

logger = get_logger(__name__)

# Global registry to track bootstrap state and prevent dual-construction
_current_components: "RuntimeComponents | None" = None


@dataclass
class RuntimeComponents:
    """Bootstrap 返回的运行时组件集合"""

    connection: WmConnection
    dispatcher: EventDispatcher
    reactor: Reactor

    def request_stop(self) -> None:
        """请求停止 reactor（可从其他线程调用）"""
        self.reactor.request_stop_threadsafe()


def bootstrap(url: str | None = None) -> RuntimeComponents:
    """构造运行时组件

    Args:
        url: GlazeWM websocket 地址，None 使用配置默认值

    Returns:
        RuntimeComponents 包含所有构造好的组件

    Raises:
        RuntimeError: 如果已经调用过 bootstrap（防止双重构造）
    """
    global _current_components

    if _current_components is not None:
        raise RuntimeError(
            "bootstrap() has already been called. "
            "Use get_current_components() to access existing components."
        )

    connection = WmConnection(url)
    dispatcher = EventDispatcher(connection)
    reactor = Reactor(connection, dispatcher)

    logger.info("[Bootstrap] Components created")

    _current_components = RuntimeComponents(
        connection=connection,
        dispatcher=dispatcher,
        reactor=reactor,
    )
    return _current_components


async def run(components: RuntimeComponents) -> ExitCode:
    """连接、订阅并运行 reactor

    Returns:
        ExitCode，致命错误不会抛出，已记录日志
    """
    connection = components.connection
    try:
        await connection.connect()
        await connection.subscribe()
        return await components.reactor.run()
    except WmConnectionError as e:
        logger.error(f"[Bootstrap] Connection failed: {e}")
        return ExitCode.CONNECTION_FAILED
    except SubscriptionError as e:
        logger.error(f"[Bootstrap] Subscription failed: {e}")
        return ExitCode.SUBSCRIPTION_FAILED
    except ReadError as e:
        logger.error(f"[Bootstrap] Connection lost: {e}")
        return ExitCode.READ_FAILED
    finally:
        await connection.close()
        logger.debug(f"[Bootstrap] Counters: {metrics.get_all_counters()}")


def get_current_components() -> "RuntimeComponents | None":
    """获取当前运行的 RuntimeComponents

    如果 bootstrap() 还没调用，返回 None。
    """
    return _current_components


def _reset_for_testing() -> None:
    """重置 bootstrap 状态（仅用于测试）"""
    global _current_components
    _current_components = None

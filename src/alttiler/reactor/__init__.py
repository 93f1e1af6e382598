"""Reactor 模块

模块结构：
- state: ReactorState, ExitCode
- dispatcher: EventDispatcher 事件路由与处理
- reactor: Reactor 读循环
"""

from .dispatcher import EventDispatcher
from .reactor import Reactor
from .state import ExitCode, ReactorState

__all__ = [
    "EventDispatcher",
    "Reactor",
    "ReactorState",
    "ExitCode",
]

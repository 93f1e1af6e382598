"""Reactor 状态与退出码"""

from enum import Enum, IntEnum


class ReactorState(Enum):
    """Reactor 状态

    awaiting_message → decoding → routing → handling → awaiting_message
    shutdown 为终止状态。
    """
    AWAITING_MESSAGE = "awaiting_message"
    DECODING = "decoding"
    ROUTING = "routing"
    HANDLING = "handling"
    SHUTDOWN = "shutdown"

    @property
    def is_terminal(self) -> bool:
        return self is ReactorState.SHUTDOWN


class ExitCode(IntEnum):
    """进程退出码"""
    OK = 0
    CONNECTION_FAILED = 1
    SUBSCRIPTION_FAILED = 2
    READ_FAILED = 3

"""IPC 模块 - GlazeWM websocket 连接与消息解码"""

from .client import WmConnection
from .decoder import decode

__all__ = [
    "WmConnection",
    "decode",
]

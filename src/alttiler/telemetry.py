"""Telemetry - 统一日志和指标入口

提供日志工厂、日志初始化和计数器 facade。

日志格式: [name] msg
指标示例: frames.received, decode.errors, events{type=...}, commands.sent, send.errors
"""

import logging

from . import config


def get_logger(name: str) -> logging.Logger:
    """获取带模块前缀的 logger

    Args:
        name: 模块名（通常使用 __name__）

    Returns:
        Logger 实例
    """
    return logging.getLogger(name)


def configure_logging(level: str | int | None = None) -> None:
    """初始化根 logger

    Args:
        level: 日志级别，None 使用 config.LOG_LEVEL
    """
    level = level if level is not None else config.LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=config.LOG_FORMAT)
    # websockets 的 debug 日志包含每一帧，默认压低
    logging.getLogger("websockets").setLevel(max(level, logging.INFO))


def truncate_frame(frame: str | bytes, limit: int | None = None) -> str:
    """截断原始消息用于日志输出"""
    limit = limit or config.LOG_MAX_FRAME_LEN
    text = frame if isinstance(frame, str) else repr(frame)
    if len(text) <= limit:
        return text
    return f"{text[:limit]}... ({len(text)} chars)"


class Metrics:
    """指标收集 facade

    当前只有内存计数器，进程退出即丢弃。
    """

    def __init__(self):
        self._counters: dict[str, int] = {}

    def inc(self, name: str, labels: dict[str, str] | None = None, value: int = 1) -> None:
        """递增计数器

        Args:
            name: 指标名（如 "decode.errors"）
            labels: 可选标签（如 {"type": "focus_changed"}）
            value: 递增值，默认 1
        """
        if not config.METRICS_ENABLED:
            return
        key = self._make_key(name, labels)
        self._counters[key] = self._counters.get(key, 0) + value

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> int:
        """获取计数器值（用于测试）"""
        return self._counters.get(self._make_key(name, labels), 0)

    def get_all_counters(self) -> dict[str, int]:
        """获取所有计数器（用于调试）"""
        return dict(self._counters)

    def reset(self) -> None:
        """重置所有指标（用于测试）"""
        self._counters.clear()

    def _make_key(self, name: str, labels: dict[str, str] | None) -> str:
        if not labels:
            return name
        label_str = ",".join(f"{k}={v}" for k, v in sorted(labels.items()))
        return f"{name}{{{label_str}}}"


# 全局指标实例
metrics = Metrics()

"""Pytest 配置"""

import asyncio
import json

import pytest

from alttiler.runtime.bootstrap import _reset_for_testing
from alttiler.telemetry import metrics


class FakeConnection:
    """按顺序返回预置帧的连接

    预置帧用完后 read_next 一直阻塞，模拟没有新消息的 WM。
    列表中的异常实例会在轮到时抛出。
    """

    def __init__(self, frames=()):
        self._frames = list(frames)
        self.sent: list[str] = []
        self.send_error: Exception | None = None

    async def read_next(self):
        if self._frames:
            item = self._frames.pop(0)
            if isinstance(item, Exception):
                raise item
            return item
        await asyncio.Event().wait()

    async def send(self, command):
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(command.text)


def event_frame(event_type: str | None, **data) -> str:
    """构造一条事件推送帧"""
    payload = dict(data)
    if event_type is not None:
        payload["eventType"] = event_type
    return json.dumps({
        "messageType": "event_subscription",
        "subscriptionId": "7d8f1b2c",
        "success": True,
        "error": None,
        "data": payload,
    })


@pytest.fixture
def fake_connection():
    """FakeConnection 工厂"""
    return FakeConnection


@pytest.fixture(autouse=True)
def reset_metrics():
    """每次测试前重置指标"""
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture(autouse=True)
def reset_bootstrap():
    """每次测试后重置 bootstrap 全局状态"""
    yield
    _reset_for_testing()


@pytest.fixture
def make_frame():
    """event_frame 工厂"""
    return event_frame

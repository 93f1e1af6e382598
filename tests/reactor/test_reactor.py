"""Reactor 读循环测试"""

import asyncio
import json
import logging
import threading

import pytest

from alttiler.errors import ReadError
from alttiler.reactor import ExitCode, Reactor, ReactorState
from alttiler.telemetry import metrics

EXITING = json.dumps({"data": {"eventType": "application_exiting"}})


class TestReactorScenarios:
    """端到端场景（FakeConnection）"""

    @pytest.mark.asyncio
    async def test_wide_window_then_exit(self, fake_connection):
        connection = fake_connection([
            json.dumps({"data": {"eventType": "focus_changed",
                                 "focusedContainer": {"width": 800, "height": 400}}}),
            EXITING,
        ])
        reactor = Reactor(connection)

        code = await asyncio.wait_for(reactor.run(), timeout=1.0)

        assert code is ExitCode.OK
        assert reactor.state is ReactorState.SHUTDOWN
        assert connection.sent == ["command set-tiling-direction horizontal"]

    @pytest.mark.asyncio
    async def test_tall_window(self, fake_connection):
        connection = fake_connection([
            json.dumps({"data": {"eventType": "focus_changed",
                                 "focusedContainer": {"width": 400, "height": 800}}}),
            EXITING,
        ])
        await asyncio.wait_for(Reactor(connection).run(), timeout=1.0)
        assert connection.sent == ["command set-tiling-direction vertical"]

    @pytest.mark.asyncio
    async def test_moved_square_window_sends_nothing(self, fake_connection):
        connection = fake_connection([
            json.dumps({"data": {"eventType": "focused_container_moved", "focusedContainer": {
                "type": "split",
                "children": [
                    {"type": "window", "hasFocus": False, "width": 1, "height": 1},
                    {"type": "window", "hasFocus": True, "width": 500, "height": 500},
                ],
            }}}),
            EXITING,
        ])
        await asyncio.wait_for(Reactor(connection).run(), timeout=1.0)
        assert connection.sent == []

    @pytest.mark.asyncio
    async def test_application_exiting_stops_reading(self, fake_connection):
        later = json.dumps({"data": {"eventType": "focus_changed",
                                     "focusedContainer": {"width": 800, "height": 400}}})
        connection = fake_connection([EXITING, later])

        code = await asyncio.wait_for(Reactor(connection).run(), timeout=1.0)

        assert code is ExitCode.OK
        assert connection.sent == []

    @pytest.mark.asyncio
    async def test_malformed_frame_does_not_stop_loop(self, fake_connection, caplog):
        connection = fake_connection([
            "this is not json",
            json.dumps({"data": {"eventType": "focus_changed",
                                 "focusedContainer": {"width": 400, "height": 800}}}),
            EXITING,
        ])
        with caplog.at_level(logging.WARNING):
            code = await asyncio.wait_for(Reactor(connection).run(), timeout=1.0)

        assert code is ExitCode.OK
        assert connection.sent == ["command set-tiling-direction vertical"]
        assert "malformed frame" in caplog.text
        assert metrics.get_counter("decode.errors") == 1
        assert metrics.get_counter("frames.received") == 3

    @pytest.mark.asyncio
    async def test_binary_and_unknown_frames_are_ignored(self, fake_connection, make_frame):
        connection = fake_connection([
            b"\x89\x00",
            make_frame("workspace_activated"),
            make_frame(None),
            EXITING,
        ])
        code = await asyncio.wait_for(Reactor(connection).run(), timeout=1.0)
        assert code is ExitCode.OK
        assert connection.sent == []

    @pytest.mark.asyncio
    async def test_events_processed_in_order(self, fake_connection, make_frame):
        connection = fake_connection([
            make_frame("focus_changed", focusedContainer={"width": 1, "height": 2}),
            make_frame("focus_changed", focusedContainer={"width": 2, "height": 1}),
            make_frame("focus_changed", focusedContainer={"width": 3, "height": 4}),
            EXITING,
        ])
        await asyncio.wait_for(Reactor(connection).run(), timeout=1.0)
        assert connection.sent == [
            "command set-tiling-direction vertical",
            "command set-tiling-direction horizontal",
            "command set-tiling-direction vertical",
        ]

    @pytest.mark.asyncio
    async def test_deep_moved_container_frame(self, fake_connection, make_frame):
        payload = {"type": "window", "hasFocus": True, "width": 400, "height": 800}
        for _ in range(300):
            payload = {"type": "split", "children": [payload]}
        connection = fake_connection([
            make_frame("focused_container_moved", focusedContainer=payload),
            EXITING,
        ])

        code = await asyncio.wait_for(Reactor(connection).run(), timeout=5.0)

        assert code is ExitCode.OK
        assert connection.sent == ["command set-tiling-direction vertical"]


class TestReactorTermination:
    """终止路径测试"""

    @pytest.mark.asyncio
    async def test_read_error_propagates(self, fake_connection):
        connection = fake_connection([ReadError("connection closed")])
        reactor = Reactor(connection)

        with pytest.raises(ReadError):
            await asyncio.wait_for(reactor.run(), timeout=1.0)

        assert reactor.state is ReactorState.SHUTDOWN

    @pytest.mark.asyncio
    async def test_stop_request_while_waiting(self, fake_connection):
        connection = fake_connection([])
        reactor = Reactor(connection)

        task = asyncio.create_task(reactor.run())
        await asyncio.sleep(0.05)
        assert not task.done()
        assert reactor.state is ReactorState.AWAITING_MESSAGE

        reactor.request_stop()
        code = await asyncio.wait_for(task, timeout=1.0)

        assert code is ExitCode.OK
        assert reactor.stop_requested

    @pytest.mark.asyncio
    async def test_stop_requested_before_run(self, fake_connection, make_frame):
        connection = fake_connection([
            make_frame("focus_changed", focusedContainer={"width": 1, "height": 2}),
        ])
        reactor = Reactor(connection)
        reactor.request_stop()

        code = await asyncio.wait_for(reactor.run(), timeout=1.0)

        assert code is ExitCode.OK
        assert connection.sent == []

    @pytest.mark.asyncio
    async def test_stop_from_another_thread(self, fake_connection):
        reactor = Reactor(fake_connection([]))
        task = asyncio.create_task(reactor.run())
        await asyncio.sleep(0.05)

        thread = threading.Thread(target=reactor.request_stop_threadsafe)
        thread.start()
        thread.join()

        code = await asyncio.wait_for(task, timeout=1.0)
        assert code is ExitCode.OK

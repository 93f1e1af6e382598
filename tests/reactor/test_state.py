"""ReactorState 测试"""

from alttiler.reactor import ExitCode, ReactorState


class TestReactorState:
    """状态枚举测试"""

    def test_only_shutdown_is_terminal(self):
        assert ReactorState.SHUTDOWN.is_terminal
        assert not ReactorState.AWAITING_MESSAGE.is_terminal
        assert not ReactorState.DECODING.is_terminal
        assert not ReactorState.ROUTING.is_terminal
        assert not ReactorState.HANDLING.is_terminal

    def test_exit_codes(self):
        assert ExitCode.OK == 0
        assert {int(code) for code in ExitCode} == {0, 1, 2, 3}

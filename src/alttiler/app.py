"""alttiler 入口"""

import asyncio
import signal
import sys

from rich.console import Console

from . import config
from .reactor import ExitCode
from .runtime import bootstrap, run
from .telemetry import configure_logging, get_logger

logger = get_logger(__name__)

_EXIT_MESSAGES = {
    ExitCode.CONNECTION_FAILED: "Could not connect to GlazeWM at {url}. Is it running?",
    ExitCode.SUBSCRIPTION_FAILED: "Connected to {url} but subscribing to events failed.",
    ExitCode.READ_FAILED: "Lost the connection to GlazeWM at {url}.",
}


async def start(url: str | None = None) -> ExitCode:
    """构造组件，安装信号处理，运行到结束"""
    components = bootstrap(url)

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, components.reactor.request_stop)
        except (NotImplementedError, RuntimeError):
            # Windows 的 event loop 不支持 add_signal_handler，Ctrl+C 走 KeyboardInterrupt
            pass

    return await run(components)


def main() -> None:
    """入口函数"""
    configure_logging()
    console = Console(stderr=True)

    try:
        code = asyncio.run(start())
    except KeyboardInterrupt:
        code = ExitCode.OK

    message = _EXIT_MESSAGES.get(code)
    if message:
        console.print(f"[bold red]alttiler:[/] {message.format(url=config.WM_URL)}")
    sys.exit(int(code))


if __name__ == "__main__":
    main()

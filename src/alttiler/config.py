"""alttiler 配置

配置分为以下几类：
- 连接配置：GlazeWM websocket 地址
- 订阅配置：启动时订阅的事件
- 命令配置：发送给 GlazeWM 的指令
- 日志/指标配置

地址和事件集合在进程启动时确定，运行期间不再变化。
"""

import os

# === 连接配置 ===
WM_URL = os.environ.get("ALTTILER_WM_URL", "ws://localhost:6123")  # GlazeWM IPC 地址
OPEN_TIMEOUT_SECONDS = 10.0  # websocket 握手超时（秒）

# === 事件名 ===
EVENT_FOCUS_CHANGED = "focus_changed"
EVENT_FOCUSED_CONTAINER_MOVED = "focused_container_moved"
EVENT_APPLICATION_EXITING = "application_exiting"

# === 订阅配置 ===
# 按顺序逐条发送 `sub -e <name>`
SUBSCRIBE_EVENTS = (
    EVENT_FOCUS_CHANGED,
    EVENT_FOCUSED_CONTAINER_MOVED,
    EVENT_APPLICATION_EXITING,
)

# === 协议字段 ===
MESSAGE_TYPE_CLIENT_RESPONSE = "client_response"
FOCUSED_CONTAINER_FIELD = "focusedContainer"

# === 命令配置 ===
SUBSCRIBE_PREFIX = "sub -e"
SET_TILING_DIRECTION_PREFIX = "command set-tiling-direction"

# === 日志配置 ===
LOG_LEVEL = os.environ.get("ALTTILER_LOG_LEVEL", "INFO")  # 日志级别
LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
LOG_MAX_FRAME_LEN = 200  # 日志中原始消息截断长度

# === 指标配置 ===
METRICS_ENABLED = True  # 是否启用指标收集

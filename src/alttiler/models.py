"""GlazeWM 数据模型

- Container: 布局树节点（workspace / split / window ...）
- Event: 一条入站消息
- Command: 一条出站文本指令
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from . import config


class ContainerKind(Enum):
    """容器类型

    协议里的 `type` 字段可能出现这里没有列出的值（root, monitor ...），
    统一归为 OTHER，原始字符串保留在 Container.type。
    """
    WORKSPACE = "workspace"
    WINDOW = "window"
    SPLIT = "split"
    OTHER = "other"

    @classmethod
    def from_tag(cls, tag: str | None) -> "ContainerKind":
        if tag in ("workspace", "window", "split"):
            return cls(tag)
        return cls.OTHER


class Container(BaseModel):
    """布局树节点

    每个事件都携带完整快照，节点从 payload 新建，不缓存也不修改。

    Attributes:
        type: 原始类型字符串，未知值原样保留
        has_focus: 是否持有焦点（仅部分节点类型携带）
        width: 宽度（仅有尺寸的节点携带，通常是 window）
        height: 高度
        children: 有序子节点，叶子为空
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    type: str | None = None
    has_focus: bool | None = Field(default=None, alias="hasFocus")
    width: float | None = None
    height: float | None = None
    children: list["Container"] = Field(default_factory=list)

    @property
    def kind(self) -> ContainerKind:
        return ContainerKind.from_tag(self.type)

    @property
    def is_focused_window(self) -> bool:
        """是否为持有焦点的 window"""
        return self.kind is ContainerKind.WINDOW and self.has_focus is True

    @property
    def dimensions(self) -> tuple[float, float] | None:
        """(width, height)，任一缺失返回 None"""
        if self.width is None or self.height is None:
            return None
        return self.width, self.height

    @classmethod
    def from_payload(cls, raw: dict[str, Any]) -> "Container":
        """从协议 payload 构造整棵树

        逐个节点校验（不含 children），再用显式栈挂接子节点，
        树的深度不受递归限制。

        Raises:
            ValueError: 节点不是 object，或 children 不是 array
            pydantic.ValidationError: 节点字段类型不合法
        """
        root_children: list[Container] = []
        stack: list[tuple[Any, list[Container]]] = [(raw, root_children)]
        while stack:
            node_raw, siblings = stack.pop()
            if not isinstance(node_raw, dict):
                raise ValueError(f"container must be an object, got {type(node_raw).__name__}")
            children_raw = node_raw.get("children") or []
            if not isinstance(children_raw, list):
                raise ValueError("children must be an array")

            node = cls.model_validate({k: v for k, v in node_raw.items() if k != "children"})
            siblings.append(node)
            # 逆序入栈，子节点按原顺序挂接
            stack.extend((child, node.children) for child in reversed(children_raw))
        return root_children[0]


class Event(BaseModel):
    """入站消息

    事件推送和指令回执共用同一个外层结构，只有事件推送带 data.eventType。
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    message_type: str | None = Field(default=None, alias="messageType")
    client_message: str | None = Field(default=None, alias="clientMessage")
    success: bool | None = None
    error: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)

    @field_validator("data", mode="before")
    @classmethod
    def _null_data(cls, value: Any) -> Any:
        # 错误回执里 data 为 null
        return {} if value is None else value

    @property
    def event_type(self) -> str | None:
        value = self.data.get("eventType")
        return value if isinstance(value, str) else None

    @property
    def is_client_response(self) -> bool:
        return self.message_type == config.MESSAGE_TYPE_CLIENT_RESPONSE


class TilingDirection(Enum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass(frozen=True)
class Command:
    """出站指令（纯文本帧）"""
    text: str

    @classmethod
    def subscribe(cls, event_name: str) -> "Command":
        return cls(f"{config.SUBSCRIBE_PREFIX} {event_name}")

    @classmethod
    def set_tiling_direction(cls, direction: TilingDirection) -> "Command":
        return cls(f"{config.SET_TILING_DIRECTION_PREFIX} {direction.value}")

    def __str__(self) -> str:
        return self.text

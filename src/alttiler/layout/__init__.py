"""Layout 模块

- focus: 在容器树中查找持有焦点的 window
- policy: 根据宽高决定 tiling 方向
"""

from .focus import find_focused_window, iter_preorder
from .policy import HORIZONTAL, VERTICAL, decide

__all__ = [
    "find_focused_window",
    "iter_preorder",
    "decide",
    "VERTICAL",
    "HORIZONTAL",
]

"""Focused window lookup over a container tree."""

from collections.abc import Iterator

from ..models import Container


def iter_preorder(root: Container) -> Iterator[Container]:
    """Yield every node of the tree in pre-order.

    Uses an explicit stack so tree depth is bounded by memory, not by the
    interpreter's recursion limit.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        # 逆序入栈，保证子节点按原顺序出栈
        stack.extend(reversed(node.children))


def find_focused_window(root: Container | None) -> Container | None:
    """Return the first focused window in pre-order, or None.

    Args:
        root: Subtree to search (usually the event's focusedContainer)

    Returns:
        The focused window node. None when the subtree has no focused window,
        e.g. focus sits on a workspace or split container.
    """
    if root is None:
        return None
    for node in iter_preorder(root):
        if node.is_focused_window:
            return node
    return None

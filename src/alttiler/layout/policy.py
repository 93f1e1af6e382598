"""Tiling direction policy: tall windows split vertically, wide ones horizontally."""

from ..models import Command, TilingDirection

VERTICAL = Command.set_tiling_direction(TilingDirection.VERTICAL)
HORIZONTAL = Command.set_tiling_direction(TilingDirection.HORIZONTAL)


def decide(width: float, height: float) -> Command | None:
    """Map window dimensions to a tiling command.

    Square windows (and NaN sizes) produce no command, so repeated events on
    the same window never flip the direction back and forth.
    """
    if width < height:
        return VERTICAL
    if width > height:
        return HORIZONTAL
    return None

"""Masonry layout calculator for the photo gallery.

Pure functions: every call receives the full item list and configuration and
returns fresh positions. Column-height accumulators live only for one call.
"""

from dataclasses import dataclass
from PySide6.QtCore import QRect

# Viewport breakpoints for the responsive column count.
MOBILE_MAX_WIDTH = 480
TABLET_MAX_WIDTH = 768


@dataclass(frozen=True)
class MasonryItem:
    """An item to lay out. `height` is relative to width, in percent."""
    id: str
    height: float


@dataclass(frozen=True)
class MasonryPosition:
    """Represents a positioned item in the masonry layout."""
    id: str
    column: int
    top: float
    height: float


def column_count_for_width(viewport_width: int, default_columns: int = 3) -> int:
    """Responsive column count: 1 on phones, 2 on tablets, else the default."""
    if viewport_width < MOBILE_MAX_WIDTH:
        return 1
    if viewport_width < TABLET_MAX_WIDTH:
        return 2
    return default_columns


def get_column_width(container_width: float, column_count: int, gap: float) -> float:
    """Width of one column once the gaps between columns are taken out."""
    if container_width <= 0:
        return 0
    column_count = max(1, column_count)
    total_gap = gap * (column_count - 1)
    return (container_width - total_gap) / column_count


def _item_pixel_height(item: MasonryItem, column_width: float) -> float:
    # Convert aspect ratio to pixels
    return max(0.0, (item.height / 100) * column_width)


def calculate_positions(items: list[MasonryItem], column_count: int, gap: float,
                        column_width: float) -> list[MasonryPosition]:
    """
    Calculate positions for items maintaining reading order.

    Each pass finds the lowest column height, then walks the columns left to
    right and drops the next item into every column that is within `gap` of
    that height. Items therefore fill row-like bands before any column is
    allowed to run ahead.

    Args:
        items: Items in reading order
        column_count: Number of columns
        gap: Vertical and horizontal spacing between items in pixels
        column_width: Width of each column in pixels

    Returns:
        One MasonryPosition per item, in input order
    """
    if not items or column_width <= 0:
        return []

    column_count = max(1, column_count)
    positions: list[MasonryPosition] = []
    column_heights = [0.0] * column_count
    item_index = 0

    while item_index < len(items):
        min_height = min(column_heights)
        placed = 0

        for col in range(column_count):
            if item_index >= len(items):
                break
            # Only columns at or near the minimum take part in this band
            if column_heights[col] <= min_height + gap:
                item = items[item_index]
                item_height = _item_pixel_height(item, column_width)
                positions.append(MasonryPosition(
                    id=item.id,
                    column=col,
                    top=column_heights[col],
                    height=item_height,
                ))
                column_heights[col] += item_height + gap
                item_index += 1
                placed += 1

        # Nothing fit the band (only possible with a negative gap): force progress
        if placed == 0:
            shortest_col = min(range(column_count), key=lambda i: column_heights[i])
            item = items[item_index]
            item_height = _item_pixel_height(item, column_width)
            positions.append(MasonryPosition(
                id=item.id,
                column=shortest_col,
                top=max(0.0, column_heights[shortest_col]),
                height=item_height,
            ))
            column_heights[shortest_col] += item_height + gap
            item_index += 1

    return positions


def calculate_row_positions(items: list[MasonryItem], column_count: int, gap: float,
                            column_width: float) -> list[MasonryPosition]:
    """Strict round-robin layout: item `i` always goes to column `i % column_count`."""
    if not items or column_width <= 0:
        return []

    column_count = max(1, column_count)
    positions = []
    column_heights = [0.0] * column_count

    for index, item in enumerate(items):
        col = index % column_count
        item_height = _item_pixel_height(item, column_width)
        positions.append(MasonryPosition(
            id=item.id,
            column=col,
            top=column_heights[col],
            height=item_height,
        ))
        column_heights[col] += item_height + gap

    return positions


def get_total_height(positions: list[MasonryPosition]) -> float:
    """Get the total height needed for all positioned items."""
    if not positions:
        return 0

    column_bottoms: dict[int, float] = {}
    for pos in positions:
        bottom = pos.top + pos.height
        if bottom > column_bottoms.get(pos.column, 0):
            column_bottoms[pos.column] = bottom
    return max(column_bottoms.values(), default=0)


def position_rect(position: MasonryPosition, column_width: float, gap: float) -> QRect:
    """Pixel rectangle covered by a positioned item."""
    x = position.column * (column_width + gap)
    return QRect(round(x), round(position.top), round(column_width), round(position.height))

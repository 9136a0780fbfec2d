from PySide6.QtCore import QEvent, QObject, QRect, QSize, Signal

from folio.utils.flow_log import log_flow
from folio.utils.settings import DEFAULT_SETTINGS, get_layout_mode, settings
from folio.widgets.masonry_layout import (MasonryItem, MasonryPosition,
                                          calculate_positions,
                                          calculate_row_positions,
                                          column_count_for_width,
                                          get_column_width, get_total_height,
                                          position_rect)

LAYOUT_FUNCTIONS = {
    'balanced': calculate_positions,
    'rows': calculate_row_positions,
}


class MasonryController(QObject):
    """Caches responsive geometry for one gallery widget and relayouts on change.

    The resize observer is an event filter on the attached widget only, so
    several galleries can be mounted without sharing listener state.
    """

    # Emitted after every relayout with the new total height.
    layout_changed = Signal(float)

    def __init__(self, default_columns: int | None = None, gap: int | None = None,
                 layout_mode: str | None = None, parent: QObject | None = None):
        super().__init__(parent)
        if default_columns is None:
            default_columns = settings.value(
                'masonry_column_count',
                defaultValue=DEFAULT_SETTINGS['masonry_column_count'], type=int)
        if gap is None:
            gap = settings.value(
                'masonry_gap', defaultValue=DEFAULT_SETTINGS['masonry_gap'],
                type=int)
        if layout_mode is None:
            layout_mode = get_layout_mode()
        if layout_mode not in LAYOUT_FUNCTIONS:
            raise ValueError(f'Unknown masonry layout mode: {layout_mode!r}')

        self.default_columns = max(1, int(default_columns))
        self.gap = max(0, gap)
        self.layout_mode = layout_mode
        self.columns = self.default_columns
        self.container_width = 0
        self._items: list[MasonryItem] = []
        self._positions: list[MasonryPosition] = []
        self._total_height = 0.0
        self._watched: QObject | None = None

    @property
    def column_width(self) -> float:
        return get_column_width(self.container_width, self.columns, self.gap)

    @property
    def positions(self) -> list[MasonryPosition]:
        return list(self._positions)

    def set_viewport_width(self, width: int):
        """Recalculate the column count for a new viewport width."""
        if width <= 0:
            return
        columns = column_count_for_width(width, self.default_columns)
        if columns == self.columns:
            return
        log_flow('MASONRY', f'Columns {self.columns} -> {columns} (viewport={width})')
        self.columns = columns
        self.relayout()

    def set_container_width(self, width: int):
        width = max(0, width)
        if width == self.container_width:
            return
        self.container_width = width
        self.relayout()

    def set_items(self, items: list[MasonryItem]):
        self._items = list(items)
        self.relayout()

    def calculate(self, items: list[MasonryItem]) -> list[MasonryPosition]:
        """Lay out `items` with the current geometry without storing them."""
        layout = LAYOUT_FUNCTIONS[self.layout_mode]
        return layout(items, self.columns, self.gap, self.column_width)

    def relayout(self):
        """Recompute every position from scratch and notify listeners."""
        self._positions = self.calculate(self._items)
        self._total_height = get_total_height(self._positions)
        log_flow(
            'MASONRY',
            f'Relayout mode={self.layout_mode} items={len(self._items)} '
            f'columns={self.columns} column_width={self.column_width:.1f} '
            f'height={self._total_height:.1f}',
            throttle_key='masonry_relayout',
            every_s=0.5,
        )
        self.layout_changed.emit(float(self._total_height))

    def get_total_height(self) -> float:
        return self._total_height

    def total_size(self) -> QSize:
        """Get the total size needed for the layout."""
        return QSize(int(self.container_width), round(self._total_height))

    def position_rect(self, position: MasonryPosition) -> QRect:
        return position_rect(position, self.column_width, self.gap)

    def visible_positions(self, viewport_rect: QRect) -> list[MasonryPosition]:
        """Positions whose rectangle intersects the given viewport rectangle."""
        column_width = self.column_width
        return [
            pos for pos in self._positions
            if position_rect(pos, column_width, self.gap).intersects(viewport_rect)
        ]

    def attach(self, widget: QObject):
        """Observe resize events of `widget` until `detach` is called."""
        if self._watched is widget:
            return
        self.detach()
        self._watched = widget
        widget.installEventFilter(self)
        widget.destroyed.connect(self._on_watched_destroyed)
        width_getter = getattr(widget, 'width', None)
        if callable(width_getter):
            self._apply_width(width_getter())

    def detach(self):
        if self._watched is None:
            return
        self._watched.removeEventFilter(self)
        self._watched.destroyed.disconnect(self._on_watched_destroyed)
        self._watched = None

    def _on_watched_destroyed(self, *args):
        # The C++ widget is gone; nothing left to detach from
        self._watched = None

    def _apply_width(self, width: int):
        if width <= 0:
            return
        columns = column_count_for_width(width, self.default_columns)
        if columns == self.columns and width == self.container_width:
            return
        self.columns = columns
        self.container_width = width
        self.relayout()

    def eventFilter(self, watched, event):
        if watched is self._watched and event.type() == QEvent.Type.Resize:
            self._apply_width(event.size().width())
        return super().eventFilter(watched, event)

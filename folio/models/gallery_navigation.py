from typing import Callable

from PySide6.QtCore import QObject, Qt, Signal

from folio.utils.settings import DEFAULT_SETTINGS, settings


class GalleryNavigator(QObject):
    """Keyboard navigation state for the photo lightbox."""

    index_changed = Signal(int)
    close_requested = Signal()

    def __init__(self, item_count: int = 0, initial_index: int = 0,
                 loop: bool | None = None,
                 custom_keys: dict[Qt.Key, Callable[[], None]] | None = None,
                 parent: QObject | None = None):
        super().__init__(parent)
        if loop is None:
            loop = settings.value('gallery_loop',
                                  defaultValue=DEFAULT_SETTINGS['gallery_loop'],
                                  type=bool)
        self.loop = bool(loop)
        self.custom_keys = dict(custom_keys or {})
        self._item_count = max(0, item_count)
        self._current_index = initial_index

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def item_count(self) -> int:
        return self._item_count

    def _set_index(self, index: int):
        if index == self._current_index:
            return
        self._current_index = index
        self.index_changed.emit(index)

    def go_to_previous(self):
        if self._item_count <= 1:
            return
        if self._current_index > 0:
            self._set_index(self._current_index - 1)
        elif self.loop:
            self._set_index(self._item_count - 1)

    def go_to_next(self):
        if self._item_count <= 1:
            return
        if self._current_index < self._item_count - 1:
            self._set_index(self._current_index + 1)
        elif self.loop:
            self._set_index(0)

    def go_to_index(self, index: int):
        if 0 <= index < self._item_count:
            self._set_index(index)

    def set_item_count(self, count: int):
        """Update the number of items, pulling the index back into range."""
        self._item_count = max(0, count)
        if self._current_index >= self._item_count:
            self._set_index(max(0, self._item_count - 1))

    def handle_key(self, key: Qt.Key) -> bool:
        """Handle a key press. Returns True if the key was consumed."""
        # Custom keys take precedence over the built-in bindings
        handler = self.custom_keys.get(key)
        if handler is not None:
            handler()
            return True
        if key == Qt.Key.Key_Left:
            self.go_to_previous()
        elif key == Qt.Key.Key_Right:
            self.go_to_next()
        elif key == Qt.Key.Key_Escape:
            self.close_requested.emit()
        else:
            return False
        return True

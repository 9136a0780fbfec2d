from PySide6.QtCore import QSettings, Signal

# Defaults for settings that are accessed from multiple places.
DEFAULT_SETTINGS = {
    # Columns used above the tablet breakpoint (768px).
    'masonry_column_count': 3,
    'masonry_gap': 16,
    'masonry_layout_mode': 'balanced',  # balanced (reading order + height balance) or rows (round-robin)
    'gallery_loop': True,
    'minimal_trace_logs': True,  # Only WARNING/ERROR flow logs when enabled
}


class Settings(QSettings):
    # Signal that shows that the setting with the given string was changes
    change = Signal(str, object, name='settingsChanged')

    def __init__(self):
        super().__init__('folio', 'folio')

    def setValue(self, key, value):
        super().setValue(key, value)
        self.change.emit(key, value)

# Common shared instance to ensure the Signal is also shared
settings = Settings()


def get_layout_mode() -> str:
    layout_mode = settings.value(
        'masonry_layout_mode',
        defaultValue=DEFAULT_SETTINGS['masonry_layout_mode'], type=str)
    layout_mode = str(layout_mode or '').strip().lower()
    if layout_mode not in {'balanced', 'rows'}:
        layout_mode = DEFAULT_SETTINGS['masonry_layout_mode']
    return layout_mode

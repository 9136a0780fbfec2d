from folio.utils import settings as settings_module
from folio.utils.settings import DEFAULT_SETTINGS, get_layout_mode


def test_get_layout_mode_normalizes_value(monkeypatch):
    monkeypatch.setattr(settings_module.settings, "value", lambda *args, **kwargs: " Rows ")
    assert get_layout_mode() == "rows"


def test_get_layout_mode_falls_back_on_unknown(monkeypatch):
    monkeypatch.setattr(settings_module.settings, "value", lambda *args, **kwargs: "spiral")
    assert get_layout_mode() == DEFAULT_SETTINGS["masonry_layout_mode"]


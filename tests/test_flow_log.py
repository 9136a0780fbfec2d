from folio.utils import flow_log as flow_log_module
from folio.utils.flow_log import log_flow, reset_throttle


def _set_minimal(monkeypatch, enabled):
    monkeypatch.setattr(flow_log_module.settings, "value", lambda *args, **kwargs: enabled)


def test_minimal_trace_keeps_only_warnings_and_errors(monkeypatch, capsys):
    _set_minimal(monkeypatch, True)

    log_flow("MASONRY", "Relayout items=3")
    log_flow("MANIFEST", "Skipping entry 2", level="WARNING")

    out = capsys.readouterr().out
    assert "Relayout" not in out
    assert "[TRACE][MANIFEST][WARNING] Skipping entry 2" in out


def test_full_trace_prints_debug(monkeypatch, capsys):
    _set_minimal(monkeypatch, False)

    log_flow("MASONRY", "Columns 3 -> 2")

    assert "[TRACE][MASONRY][DEBUG] Columns 3 -> 2" in capsys.readouterr().out


def test_throttle_drops_repeats(monkeypatch, capsys):
    _set_minimal(monkeypatch, False)
    reset_throttle()

    for _ in range(3):
        log_flow("MASONRY", "tick", throttle_key="tick", every_s=60)

    assert capsys.readouterr().out.count("tick") == 1
    reset_throttle()

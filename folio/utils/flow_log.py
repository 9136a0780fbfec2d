"""Timestamped, optionally throttled flow logging for layout diagnostics."""

import time

from folio.utils.settings import DEFAULT_SETTINGS, settings

_flow_log_last: dict[str, float] = {}

_ALWAYS_KEPT_LEVELS = {"WARNING", "ERROR"}


def log_flow(component: str, message: str, *, level: str = "DEBUG",
             throttle_key: str | None = None, every_s: float | None = None):
    """Print `[time][TRACE][COMPONENT][LEVEL] message`.

    With `minimal_trace_logs` enabled only warnings and errors get through.
    `throttle_key` + `every_s` drop repeats of the same key inside the window.
    """
    try:
        minimal_trace = bool(settings.value(
            "minimal_trace_logs", DEFAULT_SETTINGS["minimal_trace_logs"], type=bool))
    except Exception:
        minimal_trace = True
    if minimal_trace and level not in _ALWAYS_KEPT_LEVELS:
        return

    now = time.time()
    if throttle_key and every_s is not None:
        last = _flow_log_last.get(throttle_key, 0.0)
        if (now - last) < every_s:
            return
        _flow_log_last[throttle_key] = now
    ts = time.strftime("%H:%M:%S", time.localtime(now)) + f".{int((now % 1) * 1000):03d}"
    print(f"[{ts}][TRACE][{component}][{level}] {message}")


def reset_throttle():
    """Forget throttle timestamps."""
    _flow_log_last.clear()

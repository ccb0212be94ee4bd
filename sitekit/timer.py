"""Named wall-clock timers for profiling sections of a request."""

from __future__ import annotations

from threading import Lock
from time import perf_counter


class TimerError(RuntimeError):
    """Raised when stopping a timer that was never started."""


class Timer:
    """Track named timers; a timer with no end measures up to now."""

    def __init__(self) -> None:
        self._timers: dict[str, tuple[float, float | None]] = {}
        self._lock = Lock()

    def start(self, name: str, at: float | None = None) -> Timer:
        started = perf_counter() if at is None else at
        with self._lock:
            self._timers[name.lower()] = (started, None)
        return self

    def stop(self, name: str) -> Timer:
        key = name.lower()
        with self._lock:
            if key not in self._timers:
                raise TimerError(f"Cannot stop timer: invalid name given: {name}")
            started, _ = self._timers[key]
            self._timers[key] = (started, perf_counter())
        return self

    def has(self, name: str) -> bool:
        with self._lock:
            return name.lower() in self._timers

    def get_elapsed_time(self, name: str, decimals: int = 4) -> float | None:
        with self._lock:
            entry = self._timers.get(name.lower())
        if entry is None:
            return None
        started, ended = entry
        end = perf_counter() if ended is None else ended
        return round(end - started, decimals)

    def get_timers(self, decimals: int = 4) -> dict[str, dict[str, float | None]]:
        now = perf_counter()
        with self._lock:
            snapshot = dict(self._timers)
        return {
            name: {
                "start": started,
                "end": ended,
                "duration": round((now if ended is None else ended) - started, decimals),
            }
            for name, (started, ended) in snapshot.items()
        }


def timer(timer_obj: Timer, name: str | None = None) -> Timer:
    """Return the timer, or toggle ``name``: stop it when known, start it otherwise."""

    if not name:
        return timer_obj
    if timer_obj.has(name):
        return timer_obj.stop(name)
    return timer_obj.start(name)

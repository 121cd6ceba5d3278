import threading
from collections.abc import Callable
from typing import Protocol, TypeAlias

class TimerHandle(Protocol):
    """ A scheduled repeating callback that can be cancelled any number of times """
    def cancel(self) -> None: ...

TimerFactory : TypeAlias = Callable[[float, Callable[[], None]], TimerHandle]

class RepeatingTimer:
    """
    Call a function every interval seconds on a background thread until cancelled.

    Cancelling stops further scheduling, but a callback that has already
    started may still be running; owners that must not see a late tick should
    check their own state inside the callback.
    """
    def __init__(self, interval : float, function : Callable[[], None]):
        self.interval = interval
        self.function = function
        self._lock = threading.RLock()
        self._timer : threading.Timer|None = None
        self._cancelled = False

    @property
    def active(self) -> bool:
        with self._lock:
            return not self._cancelled and self._timer is not None

    def start(self) -> 'RepeatingTimer':
        with self._lock:
            if not self._cancelled and self._timer is None:
                self._schedule()
        return self

    def cancel(self) -> None:
        with self._lock:
            self._cancelled = True
            if self._timer:
                self._timer.cancel()
                self._timer = None

    def _schedule(self) -> None:
        self._timer = threading.Timer(self.interval, self._run)
        self._timer.daemon = True
        self._timer.start()

    def _run(self) -> None:
        with self._lock:
            if self._cancelled:
                return

        self.function()

        with self._lock:
            if not self._cancelled:
                self._schedule()

def StartRepeatingTimer(interval : float, function : Callable[[], None]) -> RepeatingTimer:
    """ Default TimerFactory: start a RepeatingTimer """
    return RepeatingTimer(interval, function).start()

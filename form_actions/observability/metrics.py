import threading
import time


class DeliveryMetrics:
    """Rolling-window counters for webhook attempts and final deliveries.

    Attempts count every request made; deliveries count one outcome per
    webhook action once its retry budget is settled.
    """

    def __init__(self, window_seconds: float = 300):
        self._window_seconds = window_seconds
        self._attempts: list[tuple[float, bool]] = []  # (timestamp, success)
        self._deliveries: list[tuple[float, bool]] = []
        self._lock = threading.Lock()

    def record_attempt(self, success: bool) -> None:
        with self._lock:
            self._attempts.append((time.monotonic(), success))

    def record_delivery(self, success: bool) -> None:
        with self._lock:
            self._deliveries.append((time.monotonic(), success))

    def _in_window(self, data: list[tuple[float, bool]]) -> list[bool]:
        cutoff = time.monotonic() - self._window_seconds
        return [ok for t, ok in data if t >= cutoff]

    def attempt_count_in_window(self) -> int:
        with self._lock:
            return len(self._in_window(self._attempts))

    def failed_attempt_count_in_window(self) -> int:
        with self._lock:
            return sum(1 for ok in self._in_window(self._attempts) if not ok)

    def attempt_failure_rate(self) -> float:
        """Share of failed attempts in the current window (0.0 to 1.0)."""
        with self._lock:
            outcomes = self._in_window(self._attempts)
        if not outcomes:
            return 0.0
        return sum(1 for ok in outcomes if not ok) / len(outcomes)

    def delivered_count_in_window(self) -> int:
        with self._lock:
            return sum(1 for ok in self._in_window(self._deliveries) if ok)

    def exhausted_count_in_window(self) -> int:
        """Webhook actions that used their whole budget without success."""
        with self._lock:
            return sum(1 for ok in self._in_window(self._deliveries) if not ok)

    def reset(self) -> None:
        with self._lock:
            self._attempts.clear()
            self._deliveries.clear()

from form_actions.config import DispatchConfig


class RetryPolicy:
    """Retry budget and exponential backoff for webhook delivery.

    Every failed attempt is retried while budget remains, whether it was a
    transport fault or a non-2xx response. Delays double from ``base_delay``:
    1s, 2s, 4s, ... with the defaults.
    """

    DEFAULT_MAX_RETRIES = 3
    DEFAULT_BASE_DELAY = 1.0

    def __init__(self, max_retries: int | None = None, base_delay: float | None = None):
        self.max_retries = max_retries if max_retries is not None else self.DEFAULT_MAX_RETRIES
        self.base_delay = base_delay if base_delay is not None else self.DEFAULT_BASE_DELAY

    @classmethod
    def from_config(cls, config: DispatchConfig) -> "RetryPolicy":
        return cls(max_retries=config.max_retries, base_delay=config.retry_delay)

    @staticmethod
    def is_success(status_code: int | None) -> bool:
        """2xx is success; anything else, including no response, is a failure."""
        return status_code is not None and 200 <= status_code < 300

    def next_delay(self, attempt: int) -> float:
        """Seconds to wait after the given failed attempt (1-based)."""
        return self.base_delay * (2 ** (attempt - 1))

    def has_attempts_remaining(self, attempt: int) -> bool:
        """Whether another attempt may follow the given one (1-based)."""
        return attempt < self.max_retries

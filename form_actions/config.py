from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class DispatchConfig:
    """Immutable settings for webhook delivery and attempt-log retention.

    Passed explicitly into the delivery unit and the intake service so tests
    can inject tiny delays instead of patching module globals.
    """

    max_retries: int = 3
    retry_delay: float = 1.0  # seconds, doubled after every failed attempt
    timeout_seconds: float = 30.0
    user_agent: str = "FormBuilder/1.0"
    log_retention: timedelta = timedelta(days=30)

    def __post_init__(self):
        if self.max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        if self.retry_delay < 0:
            raise ValueError("retry_delay must not be negative")

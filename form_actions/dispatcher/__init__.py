from .delivery import SubmissionContext, WebhookDeliveryUnit
from .engine import DispatchEngine
from .retry import RetryPolicy
from .router import ActionRouter
from .scheduler import DispatchScheduler

__all__ = [
    "ActionRouter",
    "DispatchEngine",
    "DispatchScheduler",
    "RetryPolicy",
    "SubmissionContext",
    "WebhookDeliveryUnit",
]

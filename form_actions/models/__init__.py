from .action import (
    Action, ActionKind, MessageAction, MessageType, RedirectAction,
    UnknownAction, WebhookAction, WEBHOOK_METHODS, parse_action,
)
from .result import ActionResult
from .submission import AttemptLog, Submission, SubmissionDetails

__all__ = [
    "Action", "ActionKind", "MessageAction", "MessageType", "RedirectAction",
    "UnknownAction", "WebhookAction", "WEBHOOK_METHODS", "parse_action",
    "ActionResult",
    "AttemptLog", "Submission", "SubmissionDetails",
]

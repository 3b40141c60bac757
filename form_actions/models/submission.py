from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class Submission:
    submission_id: str
    form_id: str
    title: str
    payload: dict[str, Any]
    submitted_at: datetime
    processed: bool = False


@dataclass(frozen=True)
class AttemptLog:
    """One webhook delivery attempt, successful or not. Never mutated."""

    attempt_id: str
    submission_id: str
    url: str
    method: str
    success: bool
    attempted_at: datetime
    status: int | None = None
    error: str | None = None


@dataclass
class SubmissionDetails:
    submission: Submission
    attempt_logs: list[AttemptLog] = field(default_factory=list)

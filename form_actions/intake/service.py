import logging
import uuid
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from form_actions.config import DispatchConfig
from form_actions.dispatcher.scheduler import DispatchScheduler
from form_actions.models.action import Action, WebhookAction
from form_actions.models.submission import Submission, SubmissionDetails
from form_actions.storage.store import SubmissionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionReceipt:
    submission_id: str
    success: bool = True


class FormSubmissionService:
    """Records form submissions and hands their actions to the dispatcher.

    Also exposes the read, delete and retention operations the submissions
    pages rely on.
    """

    def __init__(
        self,
        store: SubmissionStore,
        scheduler: DispatchScheduler,
        config: DispatchConfig | None = None,
    ):
        self.store = store
        self.scheduler = scheduler
        self.config = config or DispatchConfig()

    def submit_form(
        self,
        form_id: str,
        form_title: str,
        data: dict[str, Any],
        form_action: str | None = None,
        actions: Sequence[Action | Mapping[str, Any]] | None = None,
    ) -> SubmissionReceipt:
        """Store a submission and schedule its actions.

        A ``form_action`` URL is delivered as a POST webhook ahead of the
        configured actions. With nothing to run, the submission is marked
        processed straight away. Call from a running event loop when actions
        are present.
        """
        submission = Submission(
            submission_id=f"sub_{uuid.uuid4().hex[:16]}",
            form_id=form_id,
            title=form_title,
            payload=data,
            submitted_at=datetime.now(timezone.utc),
        )
        self.store.add_submission(submission)

        all_actions: list[Action | Mapping[str, Any]] = []
        if form_action:
            all_actions.append(WebhookAction(url=form_action, method="POST"))
        if actions:
            all_actions.extend(actions)

        if all_actions:
            self.scheduler.schedule(submission.submission_id, all_actions, data, form_title)
        else:
            self.store.mark_processed(submission.submission_id)

        logger.info(
            "Recorded submission %s for form %s with %d actions",
            submission.submission_id,
            form_id,
            len(all_actions),
        )
        return SubmissionReceipt(submission_id=submission.submission_id)

    def get_submissions(self, form_id: str) -> list[Submission]:
        return self.store.list_submissions(form_id)

    def get_submission_details(self, submission_id: str) -> SubmissionDetails | None:
        submission = self.store.get_submission(submission_id)
        if submission is None:
            return None
        return SubmissionDetails(
            submission=submission,
            attempt_logs=self.store.get_attempts(submission_id),
        )

    def delete_submission(self, submission_id: str) -> None:
        removed = self.store.delete_submission(submission_id)
        logger.info("Deleted submission %s and %d attempt logs", submission_id, removed)

    def cleanup_old_logs(self, now: datetime | None = None) -> int:
        """Retention sweep: drop attempt logs older than the configured horizon.

        A naive ``now`` is taken to be UTC, like every stored timestamp.
        """
        now = now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        deleted = self.store.delete_attempts_older_than(now - self.config.log_retention)
        logger.info("Removed %d attempt logs older than %s", deleted, self.config.log_retention)
        return deleted

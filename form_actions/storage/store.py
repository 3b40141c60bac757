import threading
from datetime import datetime

from form_actions.models.submission import AttemptLog, Submission


class StorageError(Exception):
    """Raised when the submission store cannot complete an operation."""


class SubmissionNotFoundError(StorageError, KeyError):
    def __init__(self, submission_id: str):
        self.submission_id = submission_id
        super().__init__(f"Submission {submission_id} not found")

    def __str__(self) -> str:
        return self.args[0]


class SubmissionStore:
    """Thread-safe in-memory store for submissions and their attempt logs.

    Every public method is a single atomic operation; nothing here spans a
    whole dispatch.
    """

    def __init__(self):
        self._submissions: dict[str, Submission] = {}
        self._attempts: list[AttemptLog] = []
        self._lock = threading.Lock()

    def add_submission(self, submission: Submission) -> None:
        with self._lock:
            self._submissions[submission.submission_id] = submission

    def get_submission(self, submission_id: str) -> Submission | None:
        with self._lock:
            return self._submissions.get(submission_id)

    def list_submissions(self, form_id: str) -> list[Submission]:
        """Submissions for a form, newest first."""
        with self._lock:
            matches = [s for s in self._submissions.values() if s.form_id == form_id]
        return sorted(matches, key=lambda s: s.submitted_at, reverse=True)

    def mark_processed(self, submission_id: str) -> None:
        with self._lock:
            submission = self._submissions.get(submission_id)
            if submission is None:
                raise SubmissionNotFoundError(submission_id)
            submission.processed = True

    def delete_submission(self, submission_id: str) -> int:
        """Delete a submission and its attempt logs. Returns logs removed."""
        with self._lock:
            if submission_id not in self._submissions:
                raise SubmissionNotFoundError(submission_id)
            kept = [a for a in self._attempts if a.submission_id != submission_id]
            removed = len(self._attempts) - len(kept)
            self._attempts = kept
            del self._submissions[submission_id]
            return removed

    def append_attempt(self, attempt: AttemptLog) -> None:
        with self._lock:
            if attempt.submission_id not in self._submissions:
                raise SubmissionNotFoundError(attempt.submission_id)
            self._attempts.append(attempt)

    def get_attempts(self, submission_id: str | None = None) -> list[AttemptLog]:
        with self._lock:
            if submission_id is None:
                return list(self._attempts)
            return [a for a in self._attempts if a.submission_id == submission_id]

    def delete_attempts_older_than(self, cutoff: datetime) -> int:
        """Remove attempt logs recorded before ``cutoff``. Returns the count."""
        with self._lock:
            kept = [a for a in self._attempts if a.attempted_at >= cutoff]
            removed = len(self._attempts) - len(kept)
            self._attempts = kept
            return removed

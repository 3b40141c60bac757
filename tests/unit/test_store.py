from datetime import datetime, timedelta, timezone

import pytest

from form_actions.storage.store import StorageError, SubmissionNotFoundError


class TestSubmissions:

    @pytest.mark.unit
    def test_list_submissions_newest_first(self, store, submission_factory):
        now = datetime.now(timezone.utc)
        older = submission_factory.create(form_id="form_a", submitted_at=now - timedelta(hours=1))
        newer = submission_factory.create(form_id="form_a", submitted_at=now)
        other = submission_factory.create(form_id="form_b")
        for s in (older, newer, other):
            store.add_submission(s)

        listed = store.list_submissions("form_a")

        assert [s.submission_id for s in listed] == [newer.submission_id, older.submission_id]

    @pytest.mark.unit
    def test_mark_processed(self, store, submission):
        store.mark_processed(submission.submission_id)
        assert store.get_submission(submission.submission_id).processed is True

    @pytest.mark.unit
    def test_mark_processed_unknown_submission_raises(self, store):
        with pytest.raises(SubmissionNotFoundError) as exc_info:
            store.mark_processed("sub_missing")
        assert isinstance(exc_info.value, StorageError)
        assert isinstance(exc_info.value, KeyError)
        assert str(exc_info.value) == "Submission sub_missing not found"


class TestAttemptLogs:

    @pytest.mark.unit
    def test_attempts_queryable_by_submission(self, store, submission_factory):
        first = submission_factory.create()
        second = submission_factory.create()
        store.add_submission(first)
        store.add_submission(second)

        store.append_attempt(submission_factory.create_attempt(first.submission_id))
        store.append_attempt(submission_factory.create_attempt(first.submission_id))
        store.append_attempt(submission_factory.create_attempt(second.submission_id))

        assert len(store.get_attempts(first.submission_id)) == 2
        assert len(store.get_attempts(second.submission_id)) == 1
        assert len(store.get_attempts()) == 3

    @pytest.mark.unit
    def test_attempt_for_unknown_submission_rejected(self, store, submission_factory):
        with pytest.raises(SubmissionNotFoundError):
            store.append_attempt(submission_factory.create_attempt("sub_missing"))

    @pytest.mark.unit
    def test_delete_submission_cascades(self, store, submission, submission_factory):
        keep = submission_factory.create()
        store.add_submission(keep)
        store.append_attempt(submission_factory.create_attempt(submission.submission_id))
        store.append_attempt(submission_factory.create_attempt(submission.submission_id, success=False))
        store.append_attempt(submission_factory.create_attempt(keep.submission_id))

        removed = store.delete_submission(submission.submission_id)

        assert removed == 2
        assert store.get_submission(submission.submission_id) is None
        assert store.get_attempts(submission.submission_id) == []
        assert len(store.get_attempts(keep.submission_id)) == 1

    @pytest.mark.unit
    def test_delete_unknown_submission_raises(self, store):
        with pytest.raises(SubmissionNotFoundError):
            store.delete_submission("sub_missing")

    @pytest.mark.unit
    def test_delete_attempts_older_than(self, store, submission, submission_factory):
        now = datetime.now(timezone.utc)
        sid = submission.submission_id
        store.append_attempt(submission_factory.create_attempt(sid, attempted_at=now - timedelta(days=45)))
        store.append_attempt(submission_factory.create_attempt(sid, attempted_at=now - timedelta(days=31)))
        recent = submission_factory.create_attempt(sid, attempted_at=now - timedelta(days=2))
        store.append_attempt(recent)

        removed = store.delete_attempts_older_than(now - timedelta(days=30))

        assert removed == 2
        assert store.get_attempts(sid) == [recent]

from .store import StorageError, SubmissionNotFoundError, SubmissionStore

__all__ = [
    "StorageError",
    "SubmissionNotFoundError",
    "SubmissionStore",
]

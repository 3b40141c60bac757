from .factories import ActionConfigFactory, SubmissionFactory

__all__ = [
    "ActionConfigFactory", "SubmissionFactory",
]

import uuid
from datetime import datetime, timezone
from typing import Any

from form_actions.models.submission import AttemptLog, Submission


class SubmissionFactory:
    """Factory for creating Submission instances with sensible defaults."""

    @staticmethod
    def create(**overrides) -> Submission:
        defaults = {
            "submission_id": f"sub_{uuid.uuid4().hex[:16]}",
            "form_id": f"form_{uuid.uuid4().hex[:8]}",
            "title": "Contact Us",
            "payload": {"name": "Ada Lovelace", "email": "ada@example.com"},
            "submitted_at": datetime.now(timezone.utc),
            "processed": False,
        }
        defaults.update(overrides)
        return Submission(**defaults)

    @staticmethod
    def create_attempt(submission_id: str, **overrides) -> AttemptLog:
        defaults = {
            "attempt_id": f"att_{uuid.uuid4().hex[:16]}",
            "submission_id": submission_id,
            "url": "http://127.0.0.1/webhook",
            "method": "POST",
            "success": True,
            "attempted_at": datetime.now(timezone.utc),
            "status": 200,
            "error": None,
        }
        defaults.update(overrides)
        return AttemptLog(**defaults)


class ActionConfigFactory:
    """Builds action configs in the shape the form builder stores them."""

    @staticmethod
    def webhook(url: str, method: str = "POST", headers: dict | None = None,
                enabled: bool = True) -> dict[str, Any]:
        webhook = {"id": f"wh_{uuid.uuid4().hex[:8]}", "url": url, "method": method,
                   "enabled": True}
        if headers is not None:
            webhook["headers"] = headers
        return {"id": f"act_{uuid.uuid4().hex[:8]}", "type": "webhook",
                "enabled": enabled, "webhook": webhook}

    @staticmethod
    def redirect(redirect_url: str = "https://example.com/thanks",
                 open_in_new_tab: bool = False, enabled: bool = True) -> dict[str, Any]:
        return {"id": f"act_{uuid.uuid4().hex[:8]}", "type": "redirect", "enabled": enabled,
                "redirectUrl": redirect_url, "openInNewTab": open_in_new_tab}

    @staticmethod
    def message(message: str = "Thanks for your submission!", message_type: str = "success",
                enabled: bool = True) -> dict[str, Any]:
        return {"id": f"act_{uuid.uuid4().hex[:8]}", "type": "message", "enabled": enabled,
                "message": message, "messageType": message_type}

import asyncio
import json
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import requests

from form_actions.config import DispatchConfig
from form_actions.dispatcher.retry import RetryPolicy
from form_actions.models.action import ActionKind, WebhookAction
from form_actions.models.result import ActionResult
from form_actions.models.submission import AttemptLog
from form_actions.observability.metrics import DeliveryMetrics
from form_actions.storage.store import StorageError, SubmissionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionContext:
    """The submission data every action of one dispatch sees."""

    submission_id: str
    title: str
    payload: dict[str, Any] = field(default_factory=dict)


class WebhookDeliveryUnit:
    """Delivers one webhook action with bounded retries and backoff.

    Each attempt is appended to the store as an AttemptLog. Nothing raised
    while sending or logging escapes ``deliver``; failures end up in the
    returned ActionResult and in the logs.
    """

    def __init__(
        self,
        store: SubmissionStore,
        config: DispatchConfig | None = None,
        metrics: DeliveryMetrics | None = None,
    ):
        self.store = store
        self.config = config or DispatchConfig()
        self.retry_policy = RetryPolicy.from_config(self.config)
        self.metrics = metrics

    def build_headers(self, action: WebhookAction) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "User-Agent": self.config.user_agent,
        }
        headers.update(action.headers)
        return headers

    def build_body(self, context: SubmissionContext, attempt: int) -> dict[str, Any]:
        return {
            "formData": context.payload,
            "metadata": {
                "formTitle": context.title,
                "submissionId": context.submission_id,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "attempt": attempt,
            },
        }

    def _send(
        self, action: WebhookAction, context: SubmissionContext, attempt: int
    ) -> tuple[int | None, str | None]:
        """Perform one blocking HTTP request. Returns (status_code, error)."""
        try:
            resp = requests.request(
                action.method,
                action.url,
                data=json.dumps(self.build_body(context, attempt), default=str),
                headers=self.build_headers(action),
                timeout=self.config.timeout_seconds,
            )
        except requests.exceptions.Timeout:
            return None, "timeout"
        except requests.exceptions.ConnectionError:
            return None, "connection_error"
        except requests.exceptions.RequestException as e:
            return None, str(e)
        except Exception as e:
            # e.g. a header value http.client cannot encode; still one logged attempt
            logger.exception("Webhook request to %s could not be sent", action.url)
            return None, f"{type(e).__name__}: {e}"

        if self.retry_policy.is_success(resp.status_code):
            return resp.status_code, None
        return resp.status_code, f"HTTP {resp.status_code}: {resp.reason}"

    async def attempt(
        self, action: WebhookAction, context: SubmissionContext, attempt: int
    ) -> AttemptLog:
        """Make a single delivery attempt and record it."""
        status_code, error = await asyncio.to_thread(self._send, action, context, attempt)

        log = AttemptLog(
            attempt_id=f"att_{uuid.uuid4().hex[:16]}",
            submission_id=context.submission_id,
            url=action.url,
            method=action.method,
            success=self.retry_policy.is_success(status_code),
            attempted_at=datetime.now(timezone.utc),
            status=status_code,
            error=error,
        )
        try:
            self.store.append_attempt(log)
        except StorageError:
            logger.exception(
                "Could not record webhook attempt %d for submission %s",
                attempt,
                context.submission_id,
            )
        if self.metrics is not None:
            self.metrics.record_attempt(log.success)
        return log

    async def deliver(self, action: WebhookAction, context: SubmissionContext) -> ActionResult:
        """Deliver with automatic retries on failure.

        Returns the result of the last attempt made: the first success, or the
        final failure once the retry budget is spent.
        """
        attempt = 1
        while True:
            log = await self.attempt(action, context, attempt)

            if log.success:
                logger.info(
                    "Webhook delivered: %s %s for submission %s (status %d, attempt %d)",
                    action.method,
                    action.url,
                    context.submission_id,
                    log.status,
                    attempt,
                )
                break

            logger.warning(
                "Webhook attempt %d/%d failed: %s %s for submission %s (%s)",
                attempt,
                self.retry_policy.max_retries,
                action.method,
                action.url,
                context.submission_id,
                log.error,
            )

            if not self.retry_policy.has_attempts_remaining(attempt):
                logger.warning(
                    "Webhook retries exhausted: %s %s for submission %s after %d attempts",
                    action.method,
                    action.url,
                    context.submission_id,
                    attempt,
                )
                break

            delay = self.retry_policy.next_delay(attempt)
            if delay > 0:
                await asyncio.sleep(delay)
            attempt += 1

        if self.metrics is not None:
            self.metrics.record_delivery(log.success)

        return ActionResult(
            kind=ActionKind.WEBHOOK,
            success=log.success,
            status=log.status,
            error=log.error,
            url=action.url,
        )

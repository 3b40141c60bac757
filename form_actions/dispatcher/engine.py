import logging
from collections.abc import Iterable, Mapping
from typing import Any

from form_actions.config import DispatchConfig
from form_actions.dispatcher.delivery import SubmissionContext, WebhookDeliveryUnit
from form_actions.dispatcher.router import ActionRouter
from form_actions.models.action import Action, parse_action
from form_actions.models.result import ActionResult
from form_actions.observability.metrics import DeliveryMetrics
from form_actions.storage.store import SubmissionNotFoundError, SubmissionStore

logger = logging.getLogger(__name__)


class DispatchEngine:
    """Runs every configured action of one submission, then marks it processed.

    Actions are handled one at a time in input order; a webhook's retries
    finish before the next action starts. A failing action never stops the
    loop and never fails the invocation. The only error that escapes
    ``dispatch`` is a storage fault while finalizing the submission.

    Example:
        engine = DispatchEngine(store)
        results = await engine.dispatch(submission_id, actions, payload, "Contact")
    """

    def __init__(
        self,
        store: SubmissionStore,
        config: DispatchConfig | None = None,
        metrics: DeliveryMetrics | None = None,
        router: ActionRouter | None = None,
    ):
        self.store = store
        self.config = config or DispatchConfig()
        self.router = router or ActionRouter(
            WebhookDeliveryUnit(store, config=self.config, metrics=metrics)
        )

    async def dispatch(
        self,
        submission_id: str,
        actions: Iterable[Action | Mapping[str, Any]],
        payload: dict[str, Any],
        title: str,
    ) -> list[ActionResult]:
        submission = self.store.get_submission(submission_id)
        if submission is None:
            raise SubmissionNotFoundError(submission_id)
        if submission.processed:
            # Re-fired trigger; everything was already attempted once.
            logger.info("Submission %s already processed, skipping dispatch", submission_id)
            return []

        parsed = [parse_action(a) if isinstance(a, Mapping) else a for a in actions]
        if not any(a.enabled for a in parsed):
            self._finalize(submission_id)
            return []

        context = SubmissionContext(submission_id=submission_id, title=title, payload=payload)
        results: list[ActionResult] = []

        for action in parsed:
            try:
                result = await self.router.route(action, context)
            except Exception as e:
                logger.exception(
                    "Action %s failed for submission %s", action.kind, submission_id
                )
                result = ActionResult(kind=action.kind, success=False, error=str(e))
            if result is not None:
                results.append(result)

        self._finalize(submission_id)

        failed = sum(1 for r in results if not r.success)
        logger.info(
            "Dispatched %d actions for submission %s (%d failed)",
            len(results),
            submission_id,
            failed,
        )
        return results

    def _finalize(self, submission_id: str) -> None:
        self.store.mark_processed(submission_id)

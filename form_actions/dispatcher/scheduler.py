import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from form_actions.dispatcher.engine import DispatchEngine
from form_actions.models.action import Action
from form_actions.models.result import ActionResult

logger = logging.getLogger(__name__)


class DispatchScheduler:
    """Runs dispatch jobs as background asyncio tasks.

    ``schedule`` returns at once, so the caller recording a submission never
    waits on webhook retries. Jobs for different submissions interleave on
    the same event loop. Firing the same job twice is safe because the
    engine skips already-processed submissions.
    """

    def __init__(self, engine: DispatchEngine):
        self.engine = engine
        self._tasks: set[asyncio.Task] = set()

    def schedule(
        self,
        submission_id: str,
        actions: Sequence[Action | Mapping[str, Any]],
        payload: dict[str, Any],
        title: str,
    ) -> asyncio.Task:
        """Start a dispatch job. Must be called from a running event loop."""
        task = asyncio.create_task(
            self.engine.dispatch(submission_id, list(actions), payload, title),
            name=f"dispatch-{submission_id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning("Dispatch job %s was cancelled", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "Dispatch job %s failed: %s", task.get_name(), exc, exc_info=exc
            )

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> list[list[ActionResult] | BaseException]:
        """Wait for every scheduled job to finish. Failures are returned, not raised."""
        results = []
        while self._tasks:
            batch = list(self._tasks)
            results.extend(await asyncio.gather(*batch, return_exceptions=True))
            self._tasks.difference_update(batch)
        return results

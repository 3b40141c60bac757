import logging
from typing import assert_never

from form_actions.dispatcher.delivery import SubmissionContext, WebhookDeliveryUnit
from form_actions.models.action import (
    Action, MessageAction, RedirectAction, UnknownAction, WebhookAction,
)
from form_actions.models.result import ActionResult

logger = logging.getLogger(__name__)


class ActionRouter:
    """Decides what happens to a single configured action.

    Webhooks go to the delivery unit. Redirects and messages are client
    directives: they succeed immediately and never touch the network or the
    attempt log. Disabled and unrecognized actions produce no result.
    """

    def __init__(self, delivery: WebhookDeliveryUnit):
        self.delivery = delivery

    async def route(self, action: Action, context: SubmissionContext) -> ActionResult | None:
        if not action.enabled:
            return None

        if isinstance(action, WebhookAction):
            return await self.delivery.deliver(action, context)

        if isinstance(action, RedirectAction):
            return ActionResult(
                kind=action.kind,
                success=True,
                directive={
                    "redirectUrl": action.redirect_url,
                    "openInNewTab": action.open_in_new_tab,
                },
            )

        if isinstance(action, MessageAction):
            return ActionResult(
                kind=action.kind,
                success=True,
                directive={
                    "message": action.message,
                    "messageType": action.message_type.value,
                },
            )

        if isinstance(action, UnknownAction):
            logger.warning(
                "Skipping unknown action type %r for submission %s: %s",
                action.kind,
                context.submission_id,
                action.reason,
            )
            return None

        assert_never(action)

from dataclasses import dataclass
from typing import Any

from form_actions.models.action import ActionKind


@dataclass(frozen=True)
class ActionResult:
    """Outcome of one processed action, returned to the dispatch caller.

    ``directive`` carries redirect/message data for the client; ``url`` is
    the webhook target.
    """

    kind: ActionKind | str
    success: bool
    status: int | None = None
    error: str | None = None
    url: str | None = None
    directive: dict[str, Any] | None = None

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class ActionKind(Enum):
    WEBHOOK = "webhook"
    REDIRECT = "redirect"
    MESSAGE = "message"


class MessageType(Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


WEBHOOK_METHODS = ("POST", "PUT", "PATCH")


@dataclass(frozen=True)
class WebhookAction:
    url: str
    method: str = "POST"
    headers: dict[str, str] = field(default_factory=dict)
    enabled: bool = True
    kind: ActionKind = field(default=ActionKind.WEBHOOK, init=False)

    def __post_init__(self):
        if self.method not in WEBHOOK_METHODS:
            raise ValueError(f"Unsupported webhook method {self.method!r}")


@dataclass(frozen=True)
class RedirectAction:
    redirect_url: str
    open_in_new_tab: bool = False
    enabled: bool = True
    kind: ActionKind = field(default=ActionKind.REDIRECT, init=False)


@dataclass(frozen=True)
class MessageAction:
    message: str
    message_type: MessageType = MessageType.SUCCESS
    enabled: bool = True
    kind: ActionKind = field(default=ActionKind.MESSAGE, init=False)


@dataclass(frozen=True)
class UnknownAction:
    """Fallback for action configs that could not be classified."""

    kind: str
    reason: str = ""
    enabled: bool = True


Action = WebhookAction | RedirectAction | MessageAction | UnknownAction


def parse_action(raw: Mapping[str, Any]) -> Action:
    """Build an Action from its stored form-configuration shape.

    The shape is the one saved by the form builder::

        {"type": "webhook", "enabled": true,
         "webhook": {"url": "...", "method": "POST", "headers": {...}}}
        {"type": "redirect", "enabled": true, "redirectUrl": "...", "openInNewTab": false}
        {"type": "message", "enabled": true, "message": "...", "messageType": "info"}

    Anything that does not fit one of these becomes an UnknownAction; this
    function never raises for bad input.
    """
    kind = raw.get("type")
    enabled = bool(raw.get("enabled", True))

    if kind == ActionKind.WEBHOOK.value:
        webhook = raw.get("webhook") or {}
        if not isinstance(webhook, Mapping):
            return UnknownAction(kind=kind, reason="webhook config is not a mapping", enabled=enabled)
        url = webhook.get("url")
        if not url:
            return UnknownAction(kind=kind, reason="webhook url missing", enabled=enabled)
        method = webhook.get("method") or "POST"
        method = method.upper() if isinstance(method, str) else method
        if method not in WEBHOOK_METHODS:
            return UnknownAction(
                kind=kind, reason=f"unsupported method {method}", enabled=enabled
            )
        headers = webhook.get("headers") or {}
        if not isinstance(headers, Mapping):
            return UnknownAction(kind=kind, reason="webhook headers are not a mapping", enabled=enabled)
        return WebhookAction(
            url=url,
            method=method,
            headers=dict(headers),
            enabled=enabled,
        )

    if kind == ActionKind.REDIRECT.value:
        redirect_url = raw.get("redirectUrl")
        if not redirect_url:
            return UnknownAction(kind=kind, reason="redirectUrl missing", enabled=enabled)
        return RedirectAction(
            redirect_url=redirect_url,
            open_in_new_tab=bool(raw.get("openInNewTab", False)),
            enabled=enabled,
        )

    if kind == ActionKind.MESSAGE.value:
        try:
            message_type = MessageType(raw.get("messageType") or "success")
        except ValueError:
            return UnknownAction(
                kind=kind,
                reason=f"unsupported messageType {raw.get('messageType')!r}",
                enabled=enabled,
            )
        return MessageAction(
            message=raw.get("message") or "",
            message_type=message_type,
            enabled=enabled,
        )

    return UnknownAction(kind=str(kind), reason="unrecognized action type", enabled=enabled)

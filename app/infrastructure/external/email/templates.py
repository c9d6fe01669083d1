"""HTML bodies for outbound email, one renderer per EmailType."""

from collections.abc import Callable
from html import escape
from typing import Any

from app.domain.enums import EmailType


def _layout(heading: str, body_html: str, button_label: str, button_url: str) -> str:
    return (
        "<!doctype html><html><body style=\"font-family:Arial,sans-serif;color:#111\">"
        f"<h2>{escape(heading)}</h2>"
        f"{body_html}"
        f"<p><a href=\"{escape(button_url, quote=True)}\" "
        "style=\"display:inline-block;padding:10px 16px;background:#111;color:#fff;"
        f"text-decoration:none;border-radius:6px\">{escape(button_label)}</a></p>"
        "</body></html>"
    )


def render_magic_link(payload: dict[str, Any]) -> str:
    space_name = payload.get("space_name") or "your portal"
    return _layout(
        f"Access {space_name}",
        "<p>Use the button below to open the portal. The link works once "
        "and expires after a few days.</p>",
        "Open portal",
        payload["link"],
    )


def render_chat_message(payload: dict[str, Any]) -> str:
    sender = payload.get("sender_name") or payload.get("sender_email") or "Someone"
    return _layout(
        f"New message in {payload.get('space_name', '')}",
        f"<p><strong>{escape(sender)}</strong> wrote:</p>"
        f"<blockquote>{escape(payload.get('message_preview', ''))}</blockquote>",
        "Reply",
        payload["portal_link"],
    )


RENDERERS: dict[EmailType, Callable[[dict[str, Any]], str]] = {
    EmailType.MAGIC_LINK: render_magic_link,
    EmailType.CHAT_MESSAGE: render_chat_message,
}


def render(kind: EmailType, payload: dict[str, Any]) -> str:
    """Return the HTML body for kind. Raises KeyError for unknown kinds."""
    return RENDERERS[kind](payload)

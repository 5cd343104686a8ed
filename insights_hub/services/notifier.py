from __future__ import annotations

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from typing import Literal
from urllib.parse import quote

from insights_hub.core.config import settings
from insights_hub.core.exceptions import ConfigurationError, NotificationError
from insights_hub.schemas.article import FeedbackInput, NotifyState, ShareInput

logger = logging.getLogger(__name__)

NotificationKind = Literal["feedback", "share"]

FEEDBACK_SUBJECT = "New feedback from AI Insights Hub"

# encodeURIComponent leaves these unescaped
_URI_COMPONENT_SAFE = "-_.!~*'()"


def _require_credentials() -> tuple[str, str]:
    sender = settings.FEEDBACK_SENDER_EMAIL
    password = settings.FEEDBACK_SENDER_APP_PASSWORD
    if not sender or not password:
        raise ConfigurationError(
            "FEEDBACK_SENDER_EMAIL and FEEDBACK_SENDER_APP_PASSWORD must be set"
        )
    return sender, password


def format_share_body(title: str, content: str, url: str | None = None) -> str:
    return f"Check out this article: {title}\n\n{url or settings.SITE_URL}\n\n---\n\n{content}"


def build_share_mailto_link(
    recipient: str, title: str, content: str, url: str | None = None
) -> str:
    """Compose a mailto: link so the reader's own mail client sends the article."""
    subject = quote(title, safe=_URI_COMPONENT_SAFE)
    body = quote(format_share_body(title, content, url), safe=_URI_COMPONENT_SAFE)
    return f"mailto:{quote(recipient, safe='@')}?subject={subject}&body={body}"


def build_feedback_message(sender: str, payload: FeedbackInput) -> EmailMessage:
    message = EmailMessage()
    message["From"] = sender
    message["To"] = settings.FEEDBACK_RECIPIENT_EMAIL or sender
    message["Subject"] = FEEDBACK_SUBJECT
    message.set_content(payload.feedback)
    return message


def build_share_message(sender: str, payload: ShareInput) -> EmailMessage:
    message = EmailMessage()
    message["From"] = sender
    message["To"] = payload.recipient_email
    message["Subject"] = payload.article_title
    message.set_content(
        format_share_body(payload.article_title, payload.article_content, payload.article_url)
    )
    return message


def _send_message(message: EmailMessage, sender: str, password: str) -> None:
    kwargs = {}
    if settings.SMTP_TIMEOUT_SEC is not None:
        kwargs["timeout"] = settings.SMTP_TIMEOUT_SEC
    with smtplib.SMTP_SSL(settings.SMTP_HOST, settings.SMTP_PORT, **kwargs) as smtp:
        smtp.login(sender, password)
        smtp.send_message(message)


async def notify(kind: NotificationKind, payload: FeedbackInput | ShareInput) -> NotifyState:
    """Dispatch one email, feedback to the site operator or a shared article to a reader.

    Raises ConfigurationError when the sender secrets are missing (nothing is
    attempted) and NotificationError when the mail transfer itself fails.
    """
    builders = {
        "feedback": (FeedbackInput, build_feedback_message),
        "share": (ShareInput, build_share_message),
    }
    if kind not in builders:
        raise ValueError(f"unknown notification kind: {kind!r}")
    payload_type, build_message = builders[kind]
    if not isinstance(payload, payload_type):
        raise TypeError(f"{kind} expects {payload_type.__name__}, got {type(payload).__name__}")

    sender, password = _require_credentials()
    message = build_message(sender, payload)

    try:
        await asyncio.to_thread(_send_message, message, sender, password)
    except (smtplib.SMTPException, OSError) as exc:
        logger.exception("[MailError] kind=%s host=%s", kind, settings.SMTP_HOST)
        raise NotificationError(f"{kind} email delivery failed") from exc

    logger.info("[MailSent] kind=%s", kind)
    return NotifyState(success=True)

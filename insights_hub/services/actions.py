from __future__ import annotations

import logging
from typing import Any, Mapping

from insights_hub.core.exceptions import ConfigurationError, DownstreamError, ValidationError
from insights_hub.schemas.article import ChatState, ChatTurn, NotifyState, SummaryState
from insights_hub.services import chat_responder, notifier, summarizer
from insights_hub.services.validators import (
    parse_chat_history,
    validate_chat_form,
    validate_feedback_form,
    validate_share_form,
    validate_summarize_form,
)

logger = logging.getLogger(__name__)

# User-facing messages never carry diagnostic detail.
SUMMARY_INVALID_MESSAGE = "Invalid input. Please provide valid article content."
SUMMARY_FAILED_MESSAGE = "Failed to generate summary. Please try again later."
CHAT_INVALID_MESSAGE = "Invalid input."
CHAT_FAILED_MESSAGE = "Failed to get response from AI."
CHAT_FALLBACK_ANSWER = "Sorry, I encountered an error. Please try again."
EMAIL_NOT_CONFIGURED_MESSAGE = "Email service is not configured. Please contact the site owner."
EMAIL_FAILED_MESSAGE = "Failed to send email. Please try again later."


async def get_summary_action(form: Mapping[str, Any]) -> SummaryState:
    try:
        data = validate_summarize_form(form)
    except ValidationError as exc:
        logger.info("[SummaryRejected] reason=%s", exc)
        return SummaryState(error=SUMMARY_INVALID_MESSAGE)

    try:
        result = await summarizer.summarize_async(data.article_content)
    except DownstreamError:
        return SummaryState(error=SUMMARY_FAILED_MESSAGE)
    return SummaryState(summary=result.summary)


async def chat_action(form: Mapping[str, Any]) -> ChatState:
    try:
        data = validate_chat_form(form)
    except ValidationError as exc:
        logger.info("[ChatRejected] reason=%s", exc)
        # the transcript is echoed back when it is still readable
        try:
            messages = parse_chat_history(form.get("messages"))
        except ValidationError:
            messages = []
        return ChatState(messages=messages, error=CHAT_INVALID_MESSAGE)

    new_messages = [*data.history, ChatTurn(role="user", content=data.user_question)]
    try:
        result = await chat_responder.respond(data.article_content, data.history, data.user_question)
    except DownstreamError:
        # both signals are kept; the UI decides which to show
        return ChatState(
            messages=[*new_messages, ChatTurn(role="model", content=CHAT_FALLBACK_ANSWER)],
            error=CHAT_FAILED_MESSAGE,
        )
    return ChatState(messages=[*new_messages, ChatTurn(role="model", content=result.answer)])


async def _notify_action(kind: notifier.NotificationKind, payload) -> NotifyState:
    try:
        return await notifier.notify(kind, payload)
    except ConfigurationError as exc:
        logger.error("[MailNotConfigured] kind=%s reason=%s", kind, exc)
        return NotifyState(error=EMAIL_NOT_CONFIGURED_MESSAGE)
    except DownstreamError:
        return NotifyState(error=EMAIL_FAILED_MESSAGE)


async def send_feedback_action(form: Mapping[str, Any]) -> NotifyState:
    try:
        payload = validate_feedback_form(form)
    except ValidationError:
        return NotifyState(error="Feedback cannot be empty.")
    return await _notify_action("feedback", payload)


async def share_article_action(form: Mapping[str, Any]) -> NotifyState:
    try:
        payload = validate_share_form(form)
    except ValidationError as exc:
        return NotifyState(error=f"Invalid input: {exc}")
    return await _notify_action("share", payload)

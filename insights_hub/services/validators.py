from __future__ import annotations

from typing import Any, Mapping

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from insights_hub.core.config import settings
from insights_hub.core.exceptions import ValidationError
from insights_hub.schemas.article import (
    ChatInput,
    ChatTurn,
    FeedbackInput,
    ShareInput,
    SummarizeInput,
)

_history_adapter = TypeAdapter(list[ChatTurn])
_email_adapter = TypeAdapter(EmailStr)


def _require_str(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"missing/invalid '{field_name}'")
    return value


def _require_non_empty_str(value: Any, field_name: str) -> str:
    value = _require_str(value, field_name)
    if not value.strip():
        raise ValidationError(f"'{field_name}' cannot be empty")
    return value


def parse_chat_history(raw: Any) -> list[ChatTurn]:
    """Decode the client-replayed transcript (a JSON list of {role, content}).

    A missing or blank field is an empty transcript; anything that does not
    decode to a list of turns is rejected.
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return []
    raw = _require_str(raw, "messages")
    try:
        return _history_adapter.validate_json(raw)
    except PydanticValidationError as exc:
        raise ValidationError(f"malformed 'messages': {exc.error_count()} error(s)") from exc


def validate_summarize_form(form: Mapping[str, Any]) -> SummarizeInput:
    content = _require_str(form.get("articleContent"), "articleContent")
    min_length = settings.SUMMARY_MIN_LENGTH
    if len(content) < min_length:
        raise ValidationError(
            f"'articleContent' is too short: {len(content)} < {min_length} characters"
        )
    return SummarizeInput(article_content=content)


def validate_chat_form(form: Mapping[str, Any]) -> ChatInput:
    article_content = _require_str(form.get("articleContent"), "articleContent")
    history = parse_chat_history(form.get("messages"))
    question = _require_non_empty_str(form.get("userQuestion"), "userQuestion")
    return ChatInput(
        article_content=article_content,
        history=history,
        user_question=question,
    )


def validate_feedback_form(form: Mapping[str, Any]) -> FeedbackInput:
    feedback = _require_non_empty_str(form.get("feedback"), "feedback")
    return FeedbackInput(feedback=feedback.strip())


def validate_recipient_email(value: Any) -> str:
    value = _require_non_empty_str(value, "recipientEmail").strip()
    try:
        return str(_email_adapter.validate_python(value))
    except PydanticValidationError as exc:
        raise ValidationError("'recipientEmail' is not a valid email address") from exc


def validate_share_form(form: Mapping[str, Any]) -> ShareInput:
    recipient = validate_recipient_email(form.get("recipientEmail"))
    title = _require_non_empty_str(form.get("articleTitle"), "articleTitle")
    content = _require_str(form.get("articleContent"), "articleContent")

    article_url = form.get("articleUrl")
    if article_url is not None:
        article_url = _require_str(article_url, "articleUrl").strip() or None

    return ShareInput(
        recipient_email=recipient,
        article_title=title.strip(),
        article_content=content,
        article_url=article_url,
    )

import smtplib
from urllib.parse import parse_qs, unquote, urlsplit

import pytest

from insights_hub.core.exceptions import ConfigurationError, NotificationError
from insights_hub.schemas.article import FeedbackInput, ShareInput
from insights_hub.services import notifier


@pytest.mark.asyncio
async def test_feedback_goes_to_operator(fake_smtp, mail_settings):
    state = await notifier.notify("feedback", FeedbackInput(feedback="Loved the code sample."))

    assert state.success is True
    smtp = fake_smtp.instances[0]
    assert (smtp.host, smtp.port) == ("smtp.gmail.com", 465)
    assert smtp.kwargs == {}
    assert smtp.logins == [("blog@gmail.com", "app-password")]
    message = smtp.sent[0]
    assert message["From"] == "blog@gmail.com"
    assert message["To"] == "owner@gmail.com"
    assert message["Subject"] == notifier.FEEDBACK_SUBJECT
    assert message.get_content().strip() == "Loved the code sample."


@pytest.mark.asyncio
async def test_feedback_recipient_defaults_to_sender(fake_smtp, mail_settings, monkeypatch):
    monkeypatch.setattr(mail_settings, "FEEDBACK_RECIPIENT_EMAIL", None)

    await notifier.notify("feedback", FeedbackInput(feedback="hi"))

    assert fake_smtp.instances[0].sent[0]["To"] == "blog@gmail.com"


@pytest.mark.asyncio
async def test_share_formats_article(fake_smtp, mail_settings):
    payload = ShareInput(
        recipient_email="reader@gmail.com",
        article_title="Modern AI",
        article_content="Body text",
        article_url="https://blog.example.org/post",
    )

    await notifier.notify("share", payload)

    message = fake_smtp.instances[0].sent[0]
    assert message["To"] == "reader@gmail.com"
    assert message["Subject"] == "Modern AI"
    assert message.get_content().strip() == (
        "Check out this article: Modern AI\n\nhttps://blog.example.org/post\n\n---\n\nBody text"
    )


@pytest.mark.asyncio
async def test_missing_secrets_fail_before_sending(fake_smtp, no_mail_settings):
    with pytest.raises(ConfigurationError):
        await notifier.notify("feedback", FeedbackInput(feedback="hi"))
    assert fake_smtp.instances == []


@pytest.mark.asyncio
async def test_delivery_failure(fake_smtp, mail_settings):
    fake_smtp.fail_with = smtplib.SMTPServerDisconnected("gone")

    with pytest.raises(NotificationError):
        await notifier.notify("feedback", FeedbackInput(feedback="hi"))


@pytest.mark.asyncio
async def test_configured_timeout_is_passed(fake_smtp, mail_settings, monkeypatch):
    monkeypatch.setattr(mail_settings, "SMTP_TIMEOUT_SEC", 5.0)

    await notifier.notify("feedback", FeedbackInput(feedback="hi"))

    assert fake_smtp.instances[0].kwargs == {"timeout": 5.0}


def test_mailto_link_is_percent_encoded():
    link = notifier.build_share_mailto_link(
        "reader@gmail.com", "AI & You", "Line one\nLine two", "https://blog.example.org/post"
    )

    parts = urlsplit(link)
    assert parts.scheme == "mailto"
    assert parts.path == "reader@gmail.com"
    assert "subject=AI%20%26%20You" in parts.query
    assert "\n" not in link and " " not in link
    query = parse_qs(parts.query)
    assert query["subject"] == ["AI & You"]
    assert unquote(parts.query.split("body=", 1)[1]) == (
        "Check out this article: AI & You\n\nhttps://blog.example.org/post\n\n---\n\nLine one\nLine two"
    )


@pytest.mark.asyncio
async def test_unknown_kind_is_rejected_before_credentials(fake_smtp, no_mail_settings):
    with pytest.raises(ValueError):
        await notifier.notify("newsletter", FeedbackInput(feedback="hi"))
    assert fake_smtp.instances == []


@pytest.mark.asyncio
async def test_payload_must_match_kind(fake_smtp, mail_settings):
    payload = ShareInput(
        recipient_email="reader@gmail.com",
        article_title="Modern AI",
        article_content="Body",
    )

    with pytest.raises(TypeError):
        await notifier.notify("feedback", payload)
    assert fake_smtp.instances == []

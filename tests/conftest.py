import os

os.environ.setdefault("GEMINI_API_KEY", "test-key")

import pytest
from fastapi.testclient import TestClient
from langchain_core.runnables import RunnableLambda

from insights_hub.core.config import settings
from insights_hub.main import app
from insights_hub.services import llm


class FakeStructuredModel:
    """Stands in for the Gemini model: records rendered prompts, returns a canned result."""

    def __init__(self):
        self.result = None
        self.error = None
        self.prompts = []
        self.schemas = []

    def build(self, schema):
        self.schemas.append(schema)
        return RunnableLambda(self._reply)

    def _reply(self, prompt_value):
        self.prompts.append(prompt_value.to_string())
        if self.error is not None:
            raise self.error
        return self.result


class FakeSMTP:
    instances = []
    fail_with = None

    def __init__(self, host, port, **kwargs):
        self.host = host
        self.port = port
        self.kwargs = kwargs
        self.logins = []
        self.sent = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def login(self, user, password):
        self.logins.append((user, password))

    def send_message(self, message):
        if FakeSMTP.fail_with is not None:
            raise FakeSMTP.fail_with
        self.sent.append(message)


@pytest.fixture
def lorem_article():
    # 150 characters
    return ("Lorem ipsum dolor sit amet, consectetur adipiscing elit. " * 3)[:150]


@pytest.fixture
def fake_model(monkeypatch):
    model = FakeStructuredModel()
    monkeypatch.setattr(llm, "get_structured_model", model.build)
    return model


@pytest.fixture
def fake_smtp(monkeypatch):
    import smtplib

    FakeSMTP.instances = []
    FakeSMTP.fail_with = None
    monkeypatch.setattr(smtplib, "SMTP_SSL", FakeSMTP)
    return FakeSMTP


@pytest.fixture
def mail_settings(monkeypatch):
    monkeypatch.setattr(settings, "FEEDBACK_SENDER_EMAIL", "blog@gmail.com")
    monkeypatch.setattr(settings, "FEEDBACK_SENDER_APP_PASSWORD", "app-password")
    monkeypatch.setattr(settings, "FEEDBACK_RECIPIENT_EMAIL", "owner@gmail.com")
    return settings


@pytest.fixture
def no_mail_settings(monkeypatch):
    monkeypatch.setattr(settings, "FEEDBACK_SENDER_EMAIL", None)
    monkeypatch.setattr(settings, "FEEDBACK_SENDER_APP_PASSWORD", None)
    return settings


@pytest.fixture
def client():
    return TestClient(app)

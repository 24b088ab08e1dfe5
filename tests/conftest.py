import pytest
from fastapi.testclient import TestClient

from app.main import app, get_gateway
from rachael.gateway import CompletionError


def completion_body(text):
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": text}, "finish_reason": "stop"}
        ],
    }


class FakeGateway:
    def __init__(self, reply="When did this happen?", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def complete(self, conversation, mode):
        self.calls.append((list(conversation), mode))
        if self.error is not None:
            raise self.error
        return completion_body(self.reply)


@pytest.fixture
def fake_gateway():
    gateway = FakeGateway()
    app.dependency_overrides[get_gateway] = lambda: gateway
    yield gateway
    app.dependency_overrides.pop(get_gateway, None)


@pytest.fixture
def failing_gateway():
    gateway = FakeGateway(error=CompletionError("Chat completion API returned 503: unavailable", 503))
    app.dependency_overrides[get_gateway] = lambda: gateway
    yield gateway
    app.dependency_overrides.pop(get_gateway, None)


@pytest.fixture
def client():
    return TestClient(app)


SETTINGS_ENV = (
    "NVIDIA_API_KEY",
    "CHAT_COMPLETIONS_URL",
    "CHAT_MODEL",
    "UPSTREAM_TIMEOUT",
)


@pytest.fixture
def clean_env(monkeypatch):
    from config.settings import get_settings

    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()

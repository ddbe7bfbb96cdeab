from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient
from services.api.app.services.push import (
    LoggingPushDispatcher,
    PushSubscription,
    PushSubscriptionRegistry,
    SubscriptionGoneError,
    notify_all,
)


def _sub(name: str) -> PushSubscription:
    return PushSubscription(endpoint=f"https://push.example/{name}", p256dh="key", auth="auth")


class _FlakyDispatcher:
    """Expired for `gone`, broken for `broken`, fine otherwise."""

    def __init__(self) -> None:
        self.delivered: list[str] = []

    def send(self, subscription: PushSubscription, payload: dict[str, Any]) -> None:
        if subscription.endpoint.endswith("gone"):
            raise SubscriptionGoneError(subscription.endpoint)
        if subscription.endpoint.endswith("broken"):
            raise RuntimeError("push service unavailable")
        self.delivered.append(subscription.endpoint)


def test_registry_deduplicates_by_endpoint() -> None:
    registry = PushSubscriptionRegistry()

    assert registry.add(_sub("a")) is True
    assert registry.add(_sub("a")) is False
    assert registry.add(_sub("b")) is True
    assert registry.count() == 2

    assert registry.remove("https://push.example/a") is True
    assert registry.remove("https://push.example/a") is False
    assert [s.endpoint for s in registry.list()] == ["https://push.example/b"]


def test_notify_all_drops_expired_and_survives_failures() -> None:
    registry = PushSubscriptionRegistry()
    for name in ("ok", "gone", "broken"):
        registry.add(_sub(name))
    dispatcher = _FlakyDispatcher()

    delivered = notify_all(registry, dispatcher, "title", "body")

    assert delivered == 1
    assert dispatcher.delivered == ["https://push.example/ok"]
    assert {s.endpoint for s in registry.list()} == {
        "https://push.example/ok",
        "https://push.example/broken",
    }


def test_notify_all_payload_shape() -> None:
    registry = PushSubscriptionRegistry()
    registry.add(_sub("ok"))
    dispatcher = LoggingPushDispatcher()

    notify_all(registry, dispatcher, "Hi", "There", {"type": "test"})

    assert dispatcher.sent == [
        ("https://push.example/ok", {"title": "Hi", "body": "There", "data": {"type": "test"}})
    ]


@pytest.fixture()
def dispatcher() -> LoggingPushDispatcher:
    return LoggingPushDispatcher()


@pytest.fixture()
def client(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, dispatcher: LoggingPushDispatcher
) -> TestClient:
    monkeypatch.setenv("DATABASE_URL", f"sqlite+pysqlite:///{tmp_path / 'crumb_push.db'}")
    monkeypatch.setenv("CRUMB_MAILER", "mock")

    from services.api.app.deps import get_push_dispatcher, get_push_registry
    from services.api.app.main import app

    registry = PushSubscriptionRegistry()
    app.dependency_overrides[get_push_registry] = lambda: registry
    app.dependency_overrides[get_push_dispatcher] = lambda: dispatcher

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


def test_subscribe_endpoints(client: TestClient, dispatcher: LoggingPushDispatcher) -> None:
    body = {"endpoint": "https://push.example/admin", "keys": {"p256dh": "k", "auth": "a"}}

    assert client.post("/v1/push/subscribe", json=body).json() == {"added": True, "subscribers": 1}
    assert client.post("/v1/push/subscribe", json=body).json() == {"added": False, "subscribers": 1}
    assert client.get("/v1/push/status").json() == {"subscribers": 1}

    client.post("/v1/push/test")
    assert dispatcher.sent[0][1]["data"]["type"] == "test"

    response = client.post("/v1/push/unsubscribe", json={"endpoint": "https://push.example/admin"})
    assert response.json() == {"subscribers": 0}


def test_subscribe_requires_keys(client: TestClient) -> None:
    response = client.post("/v1/push/subscribe", json={"endpoint": "https://push.example/x"})
    assert response.status_code == 422

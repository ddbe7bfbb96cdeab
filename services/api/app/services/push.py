"""Admin push notifications.

The registry lives as long as the process: subscriptions are lost on restart and the
admin devices re-subscribe when the dashboard is opened again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class PushError(Exception):
    """Base class for push delivery errors."""


class SubscriptionGoneError(PushError):
    def __init__(self, endpoint: str) -> None:
        super().__init__(f"Push subscription expired: {endpoint}")
        self.endpoint = endpoint


@dataclass(frozen=True, slots=True)
class PushSubscription:
    endpoint: str
    p256dh: str
    auth: str


class PushDispatcher(Protocol):
    def send(self, subscription: PushSubscription, payload: dict[str, Any]) -> None: ...


class LoggingPushDispatcher:
    """Records payloads and logs them. Used until a web push transport is configured."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, dict[str, Any]]] = []

    def send(self, subscription: PushSubscription, payload: dict[str, Any]) -> None:
        self.sent.append((subscription.endpoint, payload))
        logger.info("Push to %s: %s", subscription.endpoint, payload.get("title"))


class PushSubscriptionRegistry:
    def __init__(self) -> None:
        self._subscriptions: dict[str, PushSubscription] = {}

    def add(self, subscription: PushSubscription) -> bool:
        """Register a subscription. Returns False if the endpoint was already known."""

        if subscription.endpoint in self._subscriptions:
            logger.info("Push subscription already registered: %s", subscription.endpoint)
            return False

        self._subscriptions[subscription.endpoint] = subscription
        logger.info("Push subscription added: %s", subscription.endpoint)
        return True

    def remove(self, endpoint: str) -> bool:
        if self._subscriptions.pop(endpoint, None) is None:
            return False

        logger.info("Push subscription removed: %s", endpoint)
        return True

    def list(self) -> list[PushSubscription]:
        return list(self._subscriptions.values())

    def count(self) -> int:
        return len(self._subscriptions)


def notify_all(
    registry: PushSubscriptionRegistry,
    dispatcher: PushDispatcher,
    title: str,
    body: str,
    data: dict[str, Any] | None = None,
) -> int:
    """Send one notification to every subscriber and return how many were delivered.

    Expired subscriptions are dropped from the registry; other failures are logged.
    """

    payload = {"title": title, "body": body, "data": data or {}}

    delivered = 0
    for subscription in registry.list():
        try:
            dispatcher.send(subscription, payload)
        except SubscriptionGoneError:
            registry.remove(subscription.endpoint)
        except Exception:
            logger.exception("Push delivery failed: %s", subscription.endpoint)
        else:
            delivered += 1

    logger.info("Push sent to %d of %d subscribers", delivered, registry.count())
    return delivered


def notify_new_order(
    registry: PushSubscriptionRegistry,
    dispatcher: PushDispatcher,
    customer_name: str,
    order_id: str,
) -> int:
    return notify_all(
        registry,
        dispatcher,
        "New order received",
        f"{customer_name} just placed an order.",
        {"type": "new_order", "orderId": order_id, "customerName": customer_name, "url": "/dashboard"},
    )


def notify_test(registry: PushSubscriptionRegistry, dispatcher: PushDispatcher) -> int:
    return notify_all(
        registry,
        dispatcher,
        "Test notification",
        "Push notifications are working.",
        {"type": "test", "url": "/dashboard"},
    )

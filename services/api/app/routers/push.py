from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends
from services.api.app.deps import get_push_dispatcher, get_push_registry
from services.api.app.models.push import (
    PushStatusResponse,
    PushSubscribeRequest,
    PushSubscribeResponse,
    PushUnsubscribeRequest,
)
from services.api.app.services.push import (
    PushDispatcher,
    PushSubscription,
    PushSubscriptionRegistry,
    notify_test,
)
from services.api.app.services.side_effects import run_side_effect

router = APIRouter()


@router.post("/v1/push/subscribe", response_model=PushSubscribeResponse)
def subscribe(
    payload: PushSubscribeRequest,
    registry: PushSubscriptionRegistry = Depends(get_push_registry),
) -> PushSubscribeResponse:
    added = registry.add(
        PushSubscription(endpoint=payload.endpoint, p256dh=payload.keys.p256dh, auth=payload.keys.auth)
    )
    return PushSubscribeResponse(added=added, subscribers=registry.count())


@router.post("/v1/push/unsubscribe", response_model=PushStatusResponse)
def unsubscribe(
    payload: PushUnsubscribeRequest,
    registry: PushSubscriptionRegistry = Depends(get_push_registry),
) -> PushStatusResponse:
    registry.remove(payload.endpoint)
    return PushStatusResponse(subscribers=registry.count())


@router.get("/v1/push/status", response_model=PushStatusResponse)
def push_status(
    registry: PushSubscriptionRegistry = Depends(get_push_registry),
) -> PushStatusResponse:
    return PushStatusResponse(subscribers=registry.count())


@router.post("/v1/push/test", response_model=PushStatusResponse)
def send_test_push(
    background_tasks: BackgroundTasks,
    registry: PushSubscriptionRegistry = Depends(get_push_registry),
    dispatcher: PushDispatcher = Depends(get_push_dispatcher),
) -> PushStatusResponse:
    background_tasks.add_task(run_side_effect, "test push", notify_test, registry, dispatcher)
    return PushStatusResponse(subscribers=registry.count())

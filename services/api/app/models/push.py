from __future__ import annotations

from pydantic import BaseModel, Field


class PushKeysIn(BaseModel):
    p256dh: str
    auth: str


class PushSubscribeRequest(BaseModel):
    endpoint: str = Field(..., min_length=1)
    keys: PushKeysIn


class PushUnsubscribeRequest(BaseModel):
    endpoint: str = Field(..., min_length=1)


class PushStatusResponse(BaseModel):
    subscribers: int


class PushSubscribeResponse(BaseModel):
    added: bool
    subscribers: int

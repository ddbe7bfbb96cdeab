"""Crumb API service entrypoint."""

import logging
import os

from fastapi import FastAPI

from services.api.app.db.init_db import init_db
from services.api.app.routers.order import router as order_router
from services.api.app.routers.push import router as push_router
from services.api.app.services.mailer_factory import get_mail_sender
from services.api.app.services.push import LoggingPushDispatcher, PushSubscriptionRegistry

logging.basicConfig(
    level=os.getenv("CRUMB_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Crumb API")

app.include_router(order_router)
app.include_router(push_router)

# Process lifetime; admin devices re-subscribe after a restart.
app.state.push_registry = PushSubscriptionRegistry()
app.state.push_dispatcher = LoggingPushDispatcher()


@app.on_event("startup")
def _startup() -> None:
    init_db()
    app.state.mail_sender = get_mail_sender()


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}

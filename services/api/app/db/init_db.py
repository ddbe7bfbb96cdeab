from __future__ import annotations

import logging
import os

from services.api.app.db.database import get_engine
from services.api.app.db.models import Base

logger = logging.getLogger(__name__)


def auto_create_enabled() -> bool:
    return os.getenv("CRUMB_DB_AUTO_CREATE", "true").strip().lower() in {"1", "true", "yes", "y"}


def init_db() -> None:
    if not auto_create_enabled():
        logger.info("CRUMB_DB_AUTO_CREATE is off; skipping table creation")
        return

    engine = get_engine()
    Base.metadata.create_all(bind=engine)
    logger.info("Ensured tables: %s", ", ".join(sorted(Base.metadata.tables)))

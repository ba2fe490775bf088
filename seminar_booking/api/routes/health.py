import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from seminar_booking.core.config import APP_VERSION
from seminar_booking.core.dependencies import get_db
from seminar_booking.core.logging_config import get_logger

router = APIRouter(tags=["Health"])
logger = get_logger()

STARTED_AT = time.monotonic()


@router.get("/health")
def health(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError as e:
        logger.error(f"Health check: database unreachable -> {e}")
        database = "error"

    return {
        "status": "OK" if database == "connected" else "ERROR",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": int(time.monotonic() - STARTED_AT),
        "database": database,
        "version": APP_VERSION,
    }

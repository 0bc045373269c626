"""Health check router."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """Lightweight health endpoint with a DB round trip."""

    db_ok = False
    try:
        await db.execute(text("SELECT 1"))
        db_ok = True
    except (SQLAlchemyError, OSError) as exc:
        logger.warning("Health check database query failed: %s", exc)

    return {
        "api_ok": True,
        "db_ok": db_ok,
    }

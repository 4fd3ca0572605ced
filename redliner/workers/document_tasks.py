import asyncio
import logging
from collections.abc import Callable
from datetime import datetime

from redliner.workers.celery_app import celery_app

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, max_retries=3, default_retry_delay=60, acks_late=True)
def cleanup_expired_documents(self) -> dict:
    """Delete documents past their expiry, with their clauses and analyses."""
    logger.info("[cleanup_expired_documents] Starting")
    try:
        return asyncio.run(_cleanup_async())
    except Exception as exc:
        logger.exception(f"[cleanup_expired_documents] Failed: {exc}")
        raise self.retry(exc=exc)


async def _cleanup_async() -> dict:
    from redliner.config import Settings
    from redliner.database import create_engine, create_session_factory

    settings = Settings()
    engine = create_engine(settings)
    factory = create_session_factory(engine)
    try:
        deleted = await delete_expired_documents(factory)
    finally:
        await engine.dispose()
    return {"deleted": deleted}


async def delete_expired_documents(factory, clock: Callable[[], datetime] | None = None) -> int:
    from redliner.database import session_scope
    from redliner.repositories.document_repo import DocumentRepository
    from redliner.services.document_service import utcnow

    now = (clock or utcnow)()
    async with session_scope(factory) as session:
        deleted = await DocumentRepository(session).delete_expired(now)
    logger.info(f"[cleanup_expired_documents] Deleted {deleted} documents expired before {now.isoformat()}")
    return deleted

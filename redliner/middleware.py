import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

# Per-task context: each request (and each Celery task run) sees its own values.
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")
document_id_var: ContextVar[str] = ContextVar("document_id", default="-")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a unique request ID to every incoming request.

    Reads X-Request-ID from the request header if provided by the caller,
    otherwise generates a new UUID. Injects it into the response headers too
    so the caller can correlate their logs with ours.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers["X-Request-ID"] = request_id
        return response


@contextmanager
def document_context(document_id: uuid.UUID | str) -> Iterator[None]:
    """Tag every log line emitted inside the block with the document being processed."""
    token = document_id_var.set(str(document_id))
    try:
        yield
    finally:
        document_id_var.reset(token)


class ContextLogFilter(logging.Filter):
    """Inject the current request ID and document ID into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        record.document_id = document_id_var.get()
        return True

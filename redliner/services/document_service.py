import asyncio
import hashlib
import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from fastapi import UploadFile

from redliner.exceptions import (
    DuplicateDocumentError,
    EmptyDocumentError,
    FileTooLargeError,
    UnsupportedFileTypeError,
)
from redliner.repositories.clause_repo import ClauseRepository
from redliner.repositories.document_repo import DocumentRepository
from redliner.schemas.document import DocumentUploadResponse
from redliner.services.clause_service import ClauseService
from redliner.services.extraction_service import SUPPORTED_CONTENT_TYPES, ExtractionService

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DocumentService:
    def __init__(
        self,
        repo: DocumentRepository,
        clause_repo: ClauseRepository,
        clause_service: ClauseService,
        extraction: ExtractionService | None = None,
        ttl_hours: int = 24,
        max_upload_mb: int = 10,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.repo = repo
        self.clause_repo = clause_repo
        self.clause_service = clause_service
        self.extraction = extraction or ExtractionService()
        self.ttl = timedelta(hours=ttl_hours)
        self.max_upload_mb = max_upload_mb
        self.clock = clock

    async def upload_document(self, file: UploadFile) -> DocumentUploadResponse:
        # 1. Validate file type
        content_type = (file.content_type or "").split(";")[0].strip()
        if content_type not in SUPPORTED_CONTENT_TYPES:
            raise UnsupportedFileTypeError(content_type or "unknown")

        # 2. Read file and enforce the size cap
        content = await file.read()
        if len(content) > self.max_upload_mb * 1024 * 1024:
            raise FileTooLargeError(len(content), self.max_upload_mb)

        # 3. Reject duplicates of a live document; an expired copy is replaced
        now = self.clock()
        file_hash = hashlib.sha256(content).hexdigest()
        existing = await self.repo.get_by_file_hash(file_hash)
        if existing:
            if existing.expires_at > now:
                raise DuplicateDocumentError(file_hash)
            logger.info(f"Replacing expired document {existing.id} with a fresh upload")
            await self.repo.delete(existing)

        # 4. Extract text (PDF parsing is CPU-bound, keep it off the event loop)
        extraction = await asyncio.to_thread(self.extraction.extract, content, content_type)
        if not extraction.raw_text.strip():
            raise EmptyDocumentError(f"No text could be extracted from {file.filename!r}")

        # 5. Split into clauses
        clauses = await self.clause_service.extract_clauses(extraction.raw_text)

        # 6. Create DB records
        document = await self.repo.create(
            filename=file.filename or "unnamed",
            content_type=content_type,
            file_hash=file_hash,
            raw_text=extraction.raw_text,
            page_count=extraction.page_count,
            expires_at=now + self.ttl,
        )
        await self.clause_repo.bulk_create(
            document.id,
            [
                {
                    "content": clause.content,
                    "clause_type": clause.type.value if clause.type else None,
                    "position": clause.position,
                }
                for clause in clauses
            ],
        )

        logger.info(
            f"Stored document {document.id} ({document.filename!r}): "
            f"{len(clauses)} clauses, expires {document.expires_at.isoformat()}"
        )
        return DocumentUploadResponse(
            id=document.id,
            filename=document.filename,
            clause_count=len(clauses),
            expires_at=document.expires_at,
        )

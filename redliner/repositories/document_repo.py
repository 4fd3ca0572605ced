import uuid
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from redliner.models.document import Document


class DocumentRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, **kwargs) -> Document:
        document = Document(**kwargs)
        self.session.add(document)
        await self.session.flush()
        await self.session.refresh(document)
        return document

    async def get_by_id(self, document_id: uuid.UUID) -> Document | None:
        result = await self.session.execute(
            select(Document).where(Document.id == document_id)
        )
        return result.scalar_one_or_none()

    async def get_by_file_hash(self, file_hash: str) -> Document | None:
        result = await self.session.execute(
            select(Document).where(Document.file_hash == file_hash)
        )
        return result.scalar_one_or_none()

    async def delete(self, document: Document) -> None:
        await self.session.delete(document)
        await self.session.flush()

    async def delete_expired(self, now: datetime) -> int:
        """Delete every document past its expiry. Clauses and analyses go with it (ON DELETE CASCADE)."""
        result = await self.session.execute(
            delete(Document).where(Document.expires_at <= now)
        )
        await self.session.flush()
        return result.rowcount or 0

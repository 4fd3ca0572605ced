import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from redliner.models.clause import DocumentClause


class ClauseRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_document_id(self, document_id: uuid.UUID) -> list[DocumentClause]:
        result = await self.session.execute(
            select(DocumentClause)
            .where(DocumentClause.document_id == document_id)
            .order_by(DocumentClause.position)
        )
        return list(result.scalars().all())

    async def bulk_create(
        self, document_id: uuid.UUID, clauses: list[dict]
    ) -> list[DocumentClause]:
        """Insert multiple clauses in one flush. Each dict must have: content, clause_type, position."""
        objects = [DocumentClause(document_id=document_id, **clause) for clause in clauses]
        self.session.add_all(objects)
        await self.session.flush()
        return objects

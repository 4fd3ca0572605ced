from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from redliner.models.gold_standard_clause import GoldStandardClause


class ReferenceClauseRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_all(self) -> list[GoldStandardClause]:
        result = await self.session.execute(
            select(GoldStandardClause).order_by(GoldStandardClause.position)
        )
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(GoldStandardClause))
        return result.scalar_one()

    async def bulk_create(self, clauses: list[dict]) -> list[GoldStandardClause]:
        """Insert reference clauses in one flush. Each dict must have: clause_type, content, position."""
        objects = [GoldStandardClause(**clause) for clause in clauses]
        self.session.add_all(objects)
        await self.session.flush()
        return objects

import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from redliner.models.analysis_result import AnalysisResult


class AnalysisRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_document_id(self, document_id: uuid.UUID) -> AnalysisResult | None:
        result = await self.session.execute(
            select(AnalysisResult).where(AnalysisResult.document_id == document_id)
        )
        return result.scalar_one_or_none()

    async def save(self, document_id: uuid.UUID, recommendations: list[dict]) -> AnalysisResult:
        """Store the analysis for a document, replacing any earlier run."""
        analysis = await self.get_by_document_id(document_id)
        if analysis is None:
            analysis = AnalysisResult(document_id=document_id, recommendations=recommendations)
            self.session.add(analysis)
        else:
            analysis.recommendations = recommendations
            analysis.created_at = func.now()
        await self.session.flush()
        await self.session.refresh(analysis)
        return analysis

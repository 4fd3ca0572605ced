import logging
import uuid
from collections.abc import Callable, Sequence
from datetime import datetime

from redliner.exceptions import AnalysisNotFoundError, DocumentNotFoundError
from redliner.middleware import document_context
from redliner.models.document import Document
from redliner.repositories.analysis_repo import AnalysisRepository
from redliner.repositories.clause_repo import ClauseRepository
from redliner.repositories.document_repo import DocumentRepository
from redliner.schemas.clause import Clause, ClauseType, Recommendation, ReferenceClause
from redliner.schemas.document import AnalysisResponse
from redliner.services.document_service import utcnow
from redliner.services.pipeline.orchestrator import AnalysisPipeline
from redliner.services.revision_service import render_revised_contract, render_tracked_changes

logger = logging.getLogger(__name__)

_KNOWN_TYPES = {clause_type.value for clause_type in ClauseType}


class AnalysisService:
    def __init__(
        self,
        document_repo: DocumentRepository,
        clause_repo: ClauseRepository,
        analysis_repo: AnalysisRepository,
        pipeline: AnalysisPipeline,
        references: Sequence[ReferenceClause],
        clock: Callable[[], datetime] = utcnow,
    ):
        self.document_repo = document_repo
        self.clause_repo = clause_repo
        self.analysis_repo = analysis_repo
        self.pipeline = pipeline
        self.references = references
        self.clock = clock

    async def analyze_document(self, document_id: uuid.UUID) -> AnalysisResponse:
        """Run the pipeline over a stored document and save the result, replacing any earlier run."""
        document = await self._get_live_document(document_id)
        rows = await self.clause_repo.get_by_document_id(document_id)
        clauses = [
            Clause(
                content=row.content,
                type=ClauseType(row.clause_type) if row.clause_type in _KNOWN_TYPES else None,
                position=row.position,
            )
            for row in rows
        ]

        with document_context(document.id):
            recommendations = await self.pipeline.analyze(clauses, self.references)
            if clauses and not recommendations:
                logger.warning(f"Analysis of {len(clauses)} clauses produced no recommendations")

            analysis = await self.analysis_repo.save(
                document_id,
                [rec.model_dump(mode="json", by_alias=True) for rec in recommendations],
            )
            logger.info(f"Stored {len(recommendations)} recommendations")

        return AnalysisResponse(
            document_id=document_id,
            recommendations=recommendations,
            created_at=analysis.created_at,
        )

    async def get_analysis(self, document_id: uuid.UUID) -> AnalysisResponse:
        await self._get_live_document(document_id)
        return await self._load_analysis(document_id)

    async def get_revised_contract(self, document_id: uuid.UUID, tracked: bool = False) -> str:
        document = await self._get_live_document(document_id)
        analysis = await self._load_analysis(document_id)
        render = render_tracked_changes if tracked else render_revised_contract
        return render(document.raw_text, analysis.recommendations, self.clock())

    async def _load_analysis(self, document_id: uuid.UUID) -> AnalysisResponse:
        analysis = await self.analysis_repo.get_by_document_id(document_id)
        if analysis is None:
            raise AnalysisNotFoundError(str(document_id))
        return AnalysisResponse(
            document_id=document_id,
            recommendations=[Recommendation.model_validate(rec) for rec in analysis.recommendations],
            created_at=analysis.created_at,
        )

    async def _get_live_document(self, document_id: uuid.UUID) -> Document:
        document = await self.document_repo.get_by_id(document_id)
        if document is None or document.expires_at <= self.clock():
            raise DocumentNotFoundError(str(document_id))
        return document

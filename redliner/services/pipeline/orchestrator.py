import logging
from collections.abc import Mapping, Sequence

from redliner.exceptions import ReferenceSetError
from redliner.schemas.clause import Clause, ClauseType, Recommendation, ReferenceClause
from redliner.services.pipeline.classifier import classify_clause
from redliner.services.pipeline.generation import LLMRecommendationGenerator
from redliner.services.pipeline.matcher import match
from redliner.services.pipeline.ranker import CLAUSE_PRIORITY, DEFAULT_LIMIT, rank
from redliner.services.pipeline.recommendation_engine import RecommendationEngine

logger = logging.getLogger(__name__)


class AnalysisPipeline:
    """Classify → match → rank → recommend.

    For non-empty input with at least one reference clause the output has
    min(len(clauses), limit) recommendations in priority order. Empty inputs
    give an empty list. A malformed reference set raises ReferenceSetError.
    """

    def __init__(
        self,
        engine: RecommendationEngine,
        limit: int = DEFAULT_LIMIT,
        priority: Mapping[ClauseType, int] = CLAUSE_PRIORITY,
    ):
        self.engine = engine
        self.limit = limit
        self.priority = priority

    async def analyze(
        self, clauses: Sequence[Clause], references: Sequence[ReferenceClause]
    ) -> list[Recommendation]:
        if not clauses:
            logger.info("No clauses to analyze")
            return []

        validate_reference_set(references)

        typed = [classify_clause(clause) for clause in clauses]
        pairs = match(typed, references)

        if not references:
            logger.warning(f"Reference set is empty, all {len(typed)} clauses dropped")
            return []
        dropped = len(typed) - len(pairs)
        if dropped:
            logger.warning(f"{dropped} of {len(typed)} clauses had no reference clause and were dropped")

        ranked = rank(pairs, limit=self.limit, priority=self.priority)
        logger.info(
            f"Analyzing {len(ranked)} of {len(pairs)} matched clauses: "
            f"{', '.join(pair.clause_type.value for pair in ranked)}"
        )

        return await self.engine.recommend(ranked)


def validate_reference_set(references: Sequence[ReferenceClause]) -> None:
    """Reject a reference set that breaks the taxonomy or carries blank clauses."""
    for index, reference in enumerate(references):
        if not isinstance(reference, ReferenceClause):
            raise ReferenceSetError(
                f"Reference #{index} is a {type(reference).__name__}, not a ReferenceClause"
            )
        if not isinstance(reference.type, ClauseType):
            raise ReferenceSetError(f"Reference #{index} has unknown clause type {reference.type!r}")
        if not reference.content or not reference.content.strip():
            raise ReferenceSetError(f"Reference #{index} ({reference.type.value}) has no content")


def create_analysis_pipeline(settings, llm=None) -> AnalysisPipeline:
    """Wire the pipeline from settings. `llm` is an already-created LLMProvider, or None for templates only."""
    generator = (
        LLMRecommendationGenerator(llm, max_output_tokens=settings.LLM_MAX_OUTPUT_TOKENS)
        if llm is not None
        else None
    )
    engine = RecommendationEngine(generator=generator, timeout=settings.LLM_TIMEOUT_SECONDS)
    return AnalysisPipeline(engine, limit=settings.ANALYSIS_LIMIT)

import asyncio
import logging
from collections.abc import Sequence

from pydantic import ValidationError

from redliner.schemas.clause import Clause, MatchedPair, Recommendation
from redliner.schemas.generation import GenerationRequest, GenerationResult
from redliner.services.pipeline.generation import RecommendationGenerator
from redliner.services.pipeline.templates import (
    ABSOLUTE_FALLBACK,
    StaticTemplateProvider,
    TemplateProvider,
    title_for,
)

logger = logging.getLogger(__name__)


class RecommendationEngine:
    """Turn ranked pairs into recommendations, one per pair, in the same order.

    The generator is tried once for the whole batch. If it is missing, raises,
    times out, or returns anything other than one valid entry per pair, every
    pair gets its deterministic template instead. Cancellation of the calling
    task is not caught and propagates to the caller.
    """

    def __init__(
        self,
        generator: RecommendationGenerator | None = None,
        templates: TemplateProvider | None = None,
        timeout: float = 60.0,
    ):
        self.generator = generator
        self.templates = templates or StaticTemplateProvider()
        self.timeout = timeout

    async def recommend(self, pairs: Sequence[MatchedPair]) -> list[Recommendation]:
        if not pairs:
            return []

        results = await self._generate(pairs)
        if results is None:
            return [self.fallback(pair.clause) for pair in pairs]

        return [
            Recommendation(
                title=title_for(pair.clause_type),
                original_clause=pair.clause.content,
                explanation=result.explanation,
                suggestion=result.suggestion,
                risk_level=result.risk_level,
            )
            for pair, result in zip(pairs, results)
        ]

    def fallback(self, clause: Clause) -> Recommendation:
        try:
            recommendation = self.templates.render(clause)
        except Exception:
            logger.exception(f"Template rendering failed for {clause.type}, using generic provision text")
            return ABSOLUTE_FALLBACK.render(clause)

        if not recommendation.explanation.strip() or not recommendation.suggestion.strip():
            logger.warning(f"Template for {clause.type} produced empty text, using generic provision text")
            return ABSOLUTE_FALLBACK.render(clause)
        return recommendation

    async def _generate(self, pairs: Sequence[MatchedPair]) -> list[GenerationResult] | None:
        if self.generator is None:
            logger.info(f"No recommendation generator configured, using templates for {len(pairs)} clauses")
            return None

        batch = [
            GenerationRequest(
                clause_type=pair.clause_type,
                original_text=pair.clause.content,
                reference_text=pair.reference.content,
            )
            for pair in pairs
        ]

        try:
            results = await asyncio.wait_for(self.generator.generate(batch), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(
                f"Recommendation generator timed out after {self.timeout}s, "
                f"using templates for {len(pairs)} clauses"
            )
            return None
        except Exception as exc:
            logger.warning(f"Recommendation generator failed, using templates for {len(pairs)} clauses: {exc}")
            return None

        return self._validated(results, expected=len(batch))

    def _validated(self, results, expected: int) -> list[GenerationResult] | None:
        """Re-check the generator's output; implementations are not trusted to have done so."""
        if not isinstance(results, list) or len(results) != expected:
            count = len(results) if isinstance(results, list) else type(results).__name__
            logger.warning(f"Recommendation generator returned {count} results for {expected} clauses, using templates")
            return None

        try:
            return [GenerationResult.model_validate(result) for result in results]
        except ValidationError as exc:
            logger.warning(f"Recommendation generator returned malformed results, using templates: {exc.error_count()} errors")
            return None

import json
import logging
from abc import ABC, abstractmethod

from pydantic import ValidationError

from redliner.exceptions import GenerationError
from redliner.schemas.generation import GenerationBatchResult, GenerationRequest, GenerationResult
from redliner.services.llm.base import LLMProvider
from redliner.services.llm.prompts.recommendation import (
    CLAUSE_BLOCK,
    RECOMMENDATION_SYSTEM,
    RECOMMENDATION_USER,
)

logger = logging.getLogger(__name__)


class RecommendationGenerator(ABC):
    @abstractmethod
    async def generate(self, batch: list[GenerationRequest]) -> list[GenerationResult]:
        """Return one result per request, in request order.

        Implementations raise on failure; the caller decides how to recover.
        """
        ...


class LLMRecommendationGenerator(RecommendationGenerator):
    """Generate rewrites for a whole batch of clauses in a single LLM call."""

    def __init__(self, llm: LLMProvider, max_output_tokens: int = 4000):
        self.llm = llm
        self.max_output_tokens = max_output_tokens

    async def generate(self, batch: list[GenerationRequest]) -> list[GenerationResult]:
        if not batch:
            return []

        messages = [
            {"role": "system", "content": RECOMMENDATION_SYSTEM},
            {"role": "user", "content": build_recommendation_prompt(batch)},
        ]

        response = await self.llm.complete(
            messages=messages,
            temperature=0.0,
            max_tokens=self.max_output_tokens,
            response_format={"type": "json_object"},
        )
        logger.info(
            f"Generated recommendations for {len(batch)} clauses "
            f"({response.input_tokens} in / {response.output_tokens} out tokens, {response.latency_ms}ms)"
        )
        return parse_generation_response(response.content, expected=len(batch))


def build_recommendation_prompt(batch: list[GenerationRequest]) -> str:
    blocks = "\n".join(
        CLAUSE_BLOCK.format(
            index=index,
            clause_type=request.clause_type.value,
            original_text=request.original_text,
            reference_text=request.reference_text,
        )
        for index, request in enumerate(batch, start=1)
    )
    return RECOMMENDATION_USER.format(count=len(batch), clauses=blocks)


def parse_generation_response(content: str | None, expected: int) -> list[GenerationResult]:
    """Validate raw generator output. Anything but exactly `expected` well-formed entries is an error."""
    if not content:
        raise GenerationError("Generator returned an empty response")

    try:
        raw = json.loads(content)
    except json.JSONDecodeError as exc:
        raise GenerationError(f"Generator response is not valid JSON: {exc}") from exc

    try:
        result = GenerationBatchResult.model_validate(raw)
    except ValidationError as exc:
        raise GenerationError(f"Generator response has the wrong shape: {exc.error_count()} errors") from exc

    if len(result.recommendations) != expected:
        raise GenerationError(
            f"Generator returned {len(result.recommendations)} entries, expected {expected}"
        )
    return result.recommendations

import json
import logging

from pydantic import ValidationError

from redliner.exceptions import LLMProviderError
from redliner.schemas.clause import Clause, ClauseExtractionResult, ClauseType
from redliner.services.llm.base import LLMProvider
from redliner.services.llm.prompts.clause_extraction import (
    CLAUSE_EXTRACTION_SYSTEM,
    CLAUSE_EXTRACTION_USER,
)
from redliner.services.segmentation_service import split_into_clauses

logger = logging.getLogger(__name__)

_KNOWN_TYPES = {clause_type.value for clause_type in ClauseType}


class ClauseService:
    """Split raw contract text into clauses.

    Uses the LLM when one is configured, so clauses arrive pre-typed. Without
    an LLM, or when its answer is unusable, falls back to the paragraph
    splitter and leaves typing to the classifier.
    """

    def __init__(
        self,
        llm: LLMProvider | None = None,
        max_chars: int = 400_000,
        max_output_tokens: int = 4000,
    ):
        self.llm = llm
        self.max_chars = max_chars
        self.max_output_tokens = max_output_tokens

    async def extract_clauses(self, raw_text: str) -> list[Clause]:
        if self.llm is None:
            return split_into_clauses(raw_text)

        try:
            clauses = await self._extract_with_llm(raw_text)
        except (LLMProviderError, json.JSONDecodeError, ValidationError) as exc:
            logger.warning(f"LLM clause extraction failed, falling back to paragraph split: {exc}")
            return split_into_clauses(raw_text)

        if not clauses:
            logger.warning("LLM returned no clauses, falling back to paragraph split")
            return split_into_clauses(raw_text)
        return clauses

    async def _extract_with_llm(self, raw_text: str) -> list[Clause]:
        truncated_text = raw_text[:self.max_chars]
        if len(raw_text) > self.max_chars:
            logger.warning(
                f"Contract text truncated from {len(raw_text)} "
                f"to {self.max_chars} chars before LLM call"
            )

        messages = [
            {"role": "system", "content": CLAUSE_EXTRACTION_SYSTEM},
            {
                "role": "user",
                "content": CLAUSE_EXTRACTION_USER.format(contract_text=truncated_text),
            },
        ]

        response = await self.llm.complete(
            messages=messages,
            temperature=0.0,
            max_tokens=self.max_output_tokens,
            response_format={"type": "json_object"},
        )

        raw_json = json.loads(response.content)
        result = ClauseExtractionResult.model_validate(raw_json)

        logger.info(
            f"Extracted {len(result.clauses)} clauses "
            f"({response.input_tokens} in / {response.output_tokens} out tokens)"
        )

        clauses = []
        for extracted in result.clauses:
            content = extracted.content.strip()
            if not content:
                continue
            # Labels outside the taxonomy are left for the classifier to decide
            clause_type = ClauseType(extracted.clause_type) if extracted.clause_type in _KNOWN_TYPES else None
            clauses.append(Clause(content=content, type=clause_type, position=len(clauses)))
        return clauses

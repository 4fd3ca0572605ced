from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from redliner.schemas.clause import ClauseType, RiskLevel


class GenerationRequest(BaseModel):
    """One clause sent to the recommendation generator."""

    clause_type: ClauseType
    original_text: str
    reference_text: str

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}


class GenerationResult(BaseModel):
    """What the generator must return for each request, aligned by index."""

    risk_level: RiskLevel
    explanation: str = Field(..., min_length=1)
    suggestion: str = Field(..., min_length=1)

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
        "str_strip_whitespace": True,
    }


class GenerationBatchResult(BaseModel):
    recommendations: list[GenerationResult]

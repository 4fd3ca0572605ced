from enum import Enum
from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class ClauseType(str, Enum):
    LIMITATION_OF_LIABILITY = "limitation_of_liability"
    TERMINATION = "termination"
    INTELLECTUAL_PROPERTY = "intellectual_property"
    INDEMNIFICATION = "indemnification"
    PAYMENT_TERMS = "payment_terms"
    CONFIDENTIALITY = "confidentiality"
    GOVERNING_LAW = "governing_law"
    WARRANTY = "warranty"
    ASSIGNMENT = "assignment"
    OTHER = "other"

    @property
    def label(self) -> str:
        """Title-cased name, e.g. "Payment Terms"."""
        return self.value.replace("_", " ").title()


class RiskLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Clause(BaseModel):
    """One contiguous span of contract text. `type` is None until classified."""

    content: str = Field(..., min_length=1)
    type: ClauseType | None = None
    position: int = 0

    model_config = {"frozen": True}


class ReferenceClause(BaseModel):
    """A gold-standard clause used as the rewriting guide for its type."""

    type: ClauseType
    content: str = Field(..., min_length=1)
    description: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}


class MatchedPair(BaseModel):
    clause: Clause
    reference: ReferenceClause
    confidence: float = Field(..., ge=0.0, le=1.0)

    model_config = {"frozen": True}

    @property
    def clause_type(self) -> ClauseType:
        return self.clause.type or ClauseType.OTHER


class Recommendation(BaseModel):
    """Final output unit. Serialises with camelCase keys (originalClause, riskLevel)."""

    title: str = Field(..., min_length=1)
    original_clause: str
    explanation: str = Field(..., min_length=1)
    suggestion: str = Field(..., min_length=1)
    risk_level: RiskLevel

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


# Shapes exchanged with the LLM during clause extraction

class ExtractedClause(BaseModel):
    clause_type: str | None = None
    content: str = Field(..., min_length=1)


class ClauseExtractionResult(BaseModel):
    clauses: list[ExtractedClause]


import uuid
from datetime import datetime

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from redliner.schemas.clause import Recommendation

_camel = {"alias_generator": to_camel, "populate_by_name": True}


class DocumentUploadResponse(BaseModel):
    """Returned immediately after a successful upload."""
    id: uuid.UUID
    filename: str
    clause_count: int
    expires_at: datetime
    message: str = "Document uploaded. Request an analysis to get recommendations."

    model_config = {**_camel, "from_attributes": True}


class AnalysisResponse(BaseModel):
    """Ranked recommendations for one document."""
    document_id: uuid.UUID
    recommendations: list[Recommendation]
    created_at: datetime | None = None

    model_config = {**_camel, "from_attributes": True}

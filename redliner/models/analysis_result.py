from __future__ import annotations

import uuid

from sqlalchemy import ForeignKey
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from redliner.models.base import Base, CreatedAtMixin, UUIDPrimaryKey


class AnalysisResult(Base, UUIDPrimaryKey, CreatedAtMixin):
    __tablename__ = "analysis_results"

    document_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    # Serialised Recommendation objects, camelCase keys, in rank order
    recommendations: Mapped[list] = mapped_column(JSONB, default=list, nullable=False)

    document: Mapped[Document] = relationship("Document", back_populates="analysis")

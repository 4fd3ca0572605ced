from __future__ import annotations

import uuid

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from redliner.models.base import Base, CreatedAtMixin, UUIDPrimaryKey


class DocumentClause(Base, UUIDPrimaryKey, CreatedAtMixin):
    __tablename__ = "document_clauses"
    __table_args__ = (
        UniqueConstraint("document_id", "position", name="uq_clause_document_position"),
    )

    document_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("documents.id", ondelete="CASCADE"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    # NULL until classified; the pipeline classifies on read
    clause_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    document: Mapped[Document] = relationship("Document", back_populates="clauses")

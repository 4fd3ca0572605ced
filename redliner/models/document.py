from __future__ import annotations

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from redliner.models.base import Base, ExpiringMixin, UUIDPrimaryKey


class Document(Base, UUIDPrimaryKey, ExpiringMixin):
    __tablename__ = "documents"

    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    content_type: Mapped[str] = mapped_column(String(100), nullable=False)
    file_hash: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    raw_text: Mapped[str] = mapped_column(Text, nullable=False)
    page_count: Mapped[int | None] = mapped_column(Integer, nullable=True)

    clauses: Mapped[list[DocumentClause]] = relationship(
        "DocumentClause",
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="DocumentClause.position",
    )
    analysis: Mapped[AnalysisResult | None] = relationship(
        "AnalysisResult", back_populates="document", cascade="all, delete-orphan", uselist=False
    )

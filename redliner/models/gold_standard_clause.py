from sqlalchemy import Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from redliner.models.base import Base, CreatedAtMixin, UUIDPrimaryKey


class GoldStandardClause(Base, UUIDPrimaryKey, CreatedAtMixin):
    __tablename__ = "gold_standard_clauses"

    clause_type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    metadata_: Mapped[dict] = mapped_column("metadata", JSONB, default=dict, nullable=False)
    # Seeding order; the matcher prefers the lowest position among same-type references
    position: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)

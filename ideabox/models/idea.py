"""Idea model — a description filed under one category by one owner."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ideabox.database import Base


class Idea(Base):
    __tablename__ = "ideas"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    # ── Foreign keys ──
    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Set once on create, never rewritten by updates.
    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # ── Timestamps ──
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # ── Relationships ──
    category: Mapped["Category"] = relationship(  # noqa: F821
        "Category", back_populates="ideas"
    )
    owner: Mapped["User"] = relationship("User", back_populates="ideas")  # noqa: F821

    def __repr__(self) -> str:
        return f"<Idea(id={self.id}, category_id={self.category_id}, owner_id={self.owner_id})>"

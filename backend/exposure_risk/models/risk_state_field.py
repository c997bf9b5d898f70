"""RiskStateField ORM — one row per individually addressable risk state field.

Invariants:
    - name is the primary key; a field is overwritten, never deleted
    - value holds the text encoding chosen by SqlRiskStateStore (NULL = absent)

Design Decisions:
    - Key/value rows, not one wide row: each field is read and written on its own,
      which is exactly the non-transactional store contract the updater compensates for
    - Text values over JSON: timestamps keep their UTC offset on every backend
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from exposure_risk.db.base import Base


class RiskStateField(Base):
    """A single persisted risk state value."""
    __tablename__ = "risk_state_fields"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

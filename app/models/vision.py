from typing import TYPE_CHECKING, Optional

from sqlalchemy import JSON, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from app.models.twelve_week_plan import TwelveWeekPlan


class Vision(Base, TimestampMixin):
    """Singleton row for the implicit user."""

    __tablename__ = "visions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    three_year_vision: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # Ordered, at most 3 entries
    twelve_week_goals: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    # Relationships
    plans: Mapped[list["TwelveWeekPlan"]] = relationship(
        "TwelveWeekPlan", back_populates="vision"
    )

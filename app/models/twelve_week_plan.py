from datetime import date
from typing import TYPE_CHECKING, Optional

from sqlalchemy import JSON, Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from app.models.vision import Vision
    from app.models.weekly_plan import WeeklyPlan


class TwelveWeekPlan(Base, TimestampMixin):
    __tablename__ = "twelve_week_plans"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    goals: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    vision_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("visions.id"), nullable=True
    )

    # Relationships
    vision: Mapped[Optional["Vision"]] = relationship("Vision", back_populates="plans")
    weekly_plans: Mapped[list["WeeklyPlan"]] = relationship(
        "WeeklyPlan",
        back_populates="twelve_week_plan",
        order_by="WeeklyPlan.week_number",
    )

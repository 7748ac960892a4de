from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class VisionUpdate(BaseModel):
    three_year_vision: Optional[str] = None
    twelve_week_goals: list[str] = Field(default_factory=list, max_length=3)


class VisionResponse(BaseModel):
    model_config = {"from_attributes": True}
    id: int
    three_year_vision: Optional[str]
    twelve_week_goals: list[str]
    created_at: datetime
    updated_at: datetime

"""Schedule schemas."""
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List
from decimal import Decimal

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
END_TIME_PATTERN = r"^(([01]\d|2[0-3]):[0-5]\d|24:00)$"


class ScheduleWindowIn(BaseModel):
    """A single opening window for one day of the week."""

    start_time: str = Field(pattern=TIME_PATTERN, examples=["18:00"])
    end_time: str = Field(pattern=END_TIME_PATTERN, examples=["23:00"])
    price: Decimal = Field(ge=0)

    @model_validator(mode="after")
    def check_order(self):
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self


class DayScheduleUpdate(BaseModel):
    """Full replacement of a court's windows for one day."""

    windows: List[ScheduleWindowIn] = Field(default_factory=list)


class ScheduleWindowInDB(BaseModel):
    """Schema for a schedule window from database."""

    id: int
    court_id: int
    day_of_week: int
    start_time: str
    end_time: str
    price: Decimal

    model_config = ConfigDict(from_attributes=True)

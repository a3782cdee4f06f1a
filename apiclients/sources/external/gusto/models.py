from typing import Optional

from pydantic import BaseModel, ConfigDict, Field  # type: ignore


class PaySchedule(BaseModel):
    """Pydantic model for a Gusto pay schedule"""

    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = Field(default=None, description="Legacy numeric ID")
    uuid: Optional[str] = Field(default=None, description="Pay schedule UUID")
    version: Optional[str] = Field(default=None, description="Current version, required for updates")
    frequency: Optional[str] = Field(default=None, description="Every week, Every other week, Twice per month, Monthly...")
    anchor_pay_date: Optional[str] = Field(default=None, description="First pay date of the schedule")
    anchor_end_of_pay_period: Optional[str] = Field(default=None, description="Last day of the first pay period")
    day_1: Optional[int] = Field(default=None, description="First pay day of the month for twice-monthly schedules")
    day_2: Optional[int] = Field(default=None, description="Second pay day of the month for twice-monthly schedules")
    name: Optional[str] = Field(default=None, description="Display name")
    auto_pilot: Optional[bool] = Field(default=None, description="Whether payroll runs automatically")


class PayScheduleUpdateRequest(BaseModel):
    """Body of the update call. `version` must match the current pay schedule version."""

    version: str
    frequency: Optional[str] = None
    anchor_pay_date: Optional[str] = None
    anchor_end_of_pay_period: Optional[str] = None
    day_1: Optional[int] = None
    day_2: Optional[int] = None
    auto_pilot: Optional[bool] = None

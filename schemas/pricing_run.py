from datetime import datetime
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class PricingRunCreate(BaseModel):
    scenario_type: Optional[str] = Field(None, max_length=64)
    scenario_json: Optional[dict[str, Any]] = None


class PricingRunResponse(BaseModel):
    id: str
    status: Literal["queued", "running", "completed", "failed"]
    scenario_type: Optional[str] = None
    scenario_json: dict[str, Any] = Field(default_factory=dict)
    retry_count: int = 0
    results_json: Optional[dict[str, Any]] = None
    error_message: Optional[str] = None
    queued_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PricingCallback(BaseModel):
    """Payload posted by the pricing executor when a run finishes."""

    run_id: Optional[Union[str, int]] = None
    rate: Optional[Union[str, float, int]] = None
    discount_points: Optional[Union[str, float, int]] = None
    status: Optional[str] = None
    screenshot_1: Optional[str] = None
    screenshot_2: Optional[str] = None
    error_message: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class DispatchReport(BaseModel):
    success: bool
    message: str
    run_id: Optional[str] = None
    scenario_type: Optional[str] = None
    retry_attempt: Optional[int] = None
    active_run_id: Optional[str] = None
    running_for_seconds: Optional[int] = None
    executor_result: Optional[Any] = None
    executor_error: Optional[str] = None

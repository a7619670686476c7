# This project was developed with assistance from AI tools.
"""Admin dashboard schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class DashboardStats(BaseModel):
    sent_waiting: int
    completed_ready: int
    week_sent: int
    week_completed: int
    expired_failed: int
    success_rate: float
    avg_completion_time: float
    total: int
    status_distribution: dict[str, int]


class ActivityItem(BaseModel):
    id: str
    type: Literal["sent", "completed", "expiring"]
    verification_id: str
    customer_name: str
    message: str
    timestamp: datetime


class ActivityResponse(BaseModel):
    data: list[ActivityItem]

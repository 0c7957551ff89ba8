from datetime import datetime, timedelta, timezone
from typing import Literal

from pydantic import BaseModel, Field

DATE_PERIODS = {
    "1d": 1,
    "1w": 7,
    "1m": 30,
    "3m": 90,
    "6m": 180,
    "12m": 365,
}
DEFAULT_PERIOD_DAYS = 30


def calculate_date_range_start(period: str, now: datetime | None = None) -> datetime:
    """
    Returns the start of the look-back window for a date period.

    Unknown periods fall back to 30 days.

    Args:
        period (str): One of ``1d``, ``1w``, ``1m``, ``3m``, ``6m`` or ``12m``.
        now (datetime | None): Reference time. Defaults to the current UTC time.
    """
    now = now if now else datetime.now(timezone.utc)
    days = DATE_PERIODS.get(period, DEFAULT_PERIOD_DAYS)
    return now - timedelta(days=days)


class PollConfig(BaseModel):
    event: Literal["newOrUpdated", "newOnly"] = Field(
        default="newOrUpdated", description="Which changes to report"
    )
    date_period: str = Field(default="1m", description="Look-back window")
    limit: int = Field(default=50, gt=0, description="Records per page")
    max_pages: int = Field(default=10, gt=0, description="Pages fetched per poll")
    created_field: str = Field(default="createdAt")
    updated_field: str = Field(default="updatedAt")
    debug: bool = False

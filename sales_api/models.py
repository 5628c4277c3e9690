"""
Pydantic models for API request/response schemas.
"""

from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SalesRecord(BaseModel):
    """One sale transaction as stored in the sales collection."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = Field(default=None, alias="_id")
    date: Optional[datetime] = None
    region: Optional[str] = None
    product: Optional[str] = None
    category: Optional[str] = None
    customer: Optional[str] = None
    salesperson: Optional[str] = None
    channel: Optional[str] = None
    amount: Union[int, float] = Field(ge=0)

    @field_validator("id", mode="before")
    @classmethod
    def stringify_object_id(cls, value: Any) -> Optional[str]:
        # ObjectId from the driver, plain strings from fixtures
        return None if value is None else str(value)


class RegionAggregate(BaseModel):
    salesperson: Optional[str] = None
    totalSales: Union[int, float]


class HealthResponse(BaseModel):
    status: str
    mongodb: str
    timestamp: datetime


class ErrorResponse(BaseModel):
    message: str
    status: int
    type: str = "error"


class DataAccessErrorResponse(BaseModel):
    message: str
    error: dict

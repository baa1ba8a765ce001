from datetime import datetime
from typing import Any, List, Optional
from pydantic import BaseModel, Field, StrictInt


class Coupon(BaseModel):
    # Assigned by the store, None until the coupon is created
    id: Optional[int] = None
    name: str
    percent: int
    isActive: bool = True

    created: Optional[datetime] = None
    lastUpdated: Optional[datetime] = None


class CouponCreateInput(BaseModel):
    name: str
    percent: StrictInt
    isActive: bool = True
    created: Optional[datetime] = None


class CouponUpdateInput(BaseModel):
    id: int
    name: str
    percent: StrictInt
    isActive: bool = True


class CouponView(BaseModel):
    id: int
    name: str
    percent: int
    isActive: bool
    created: Optional[datetime] = None
    lastUpdated: Optional[datetime] = None


class APIResponse(BaseModel):
    isSuccess: bool = False
    result: Optional[Any] = None
    statusCode: int = 200
    errorMessages: List[str] = Field(default_factory=list)

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from config import DEFAULT_CURRENCY

# Only these keys of an incoming plan ever reach the store
PLAN_FIELDS = (
    "carrier",
    "carrierLogo",
    "plan_type",
    "sim_type",
    "title",
    "duration_days",
    "data_per_day",
    "total_data",
    "price",
    "currency",
    "speed_policy",
    "sharing_supported",
    "device_limit",
    "notes",
    "countryId",
    "country",
)

EDITABLE_PLAN_FIELDS = PLAN_FIELDS + ("is_popular",)


class PlanType(str, Enum):
    daily = "daily"
    total = "total"


class SimType(str, Enum):
    esim = "esim"
    physical = "physical"


class PlanBase(BaseModel):
    carrier: str
    carrierLogo: Optional[str] = None
    plan_type: PlanType = PlanType.total
    sim_type: SimType = SimType.esim
    title: str
    duration_days: int = Field(gt=0)
    data_per_day: Optional[str] = None
    total_data: Optional[str] = None
    price: float = Field(ge=0)
    currency: str = DEFAULT_CURRENCY
    speed_policy: str = ""
    sharing_supported: bool = False
    device_limit: Optional[int] = None
    is_popular: Optional[bool] = None
    notes: List[str] = Field(default_factory=list)

    @field_validator("notes", mode="before")
    def split_notes(cls, v: Union[str, list, None]):
        if v is None:
            return []
        if isinstance(v, str):
            return [n.strip() for n in v.split("、") if n.strip()]
        return v


class PlanCreate(PlanBase):
    countryId: str = Field(min_length=1)
    country: Optional[str] = None

from typing import Optional

from pydantic import BaseModel, ConfigDict


class CarrierCreate(BaseModel):
    name: str
    countryId: str
    logo: Optional[str] = None


class Carrier(CarrierCreate):
    id: str
    model_config = ConfigDict(extra="allow")

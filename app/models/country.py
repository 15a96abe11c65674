from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CountryBase(BaseModel):
    code: str = Field(min_length=1)
    name: str = Field(min_length=1)
    flagIcon: str = ""
    description: str = ""


class CountryCreate(CountryBase):
    pass


class CountryModify(BaseModel):
    code: Optional[str] = None
    name: Optional[str] = None
    flagIcon: Optional[str] = None
    description: Optional[str] = None


class Country(CountryBase):
    id: str
    model_config = ConfigDict(extra="allow")

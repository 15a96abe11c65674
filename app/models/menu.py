from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MenuType(str, Enum):
    esim = "esim"
    physical = "physical"


class MenuCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = ""
    pdfUrl: str = Field(min_length=1)
    type: MenuType


class Menu(MenuCreate):
    id: str
    model_config = ConfigDict(extra="allow")

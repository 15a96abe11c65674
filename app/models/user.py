from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ListKind(str, Enum):
    cart = "cart"
    inquiry = "inquiry"

    @property
    def field(self) -> str:
        """Name of the profile field holding this list."""
        return "cart" if self is ListKind.cart else "inquiryList"


class CartItem(BaseModel):
    planId: str
    quantity: int = Field(default=1, gt=0)
    addedAt: datetime = Field(default_factory=datetime.utcnow)
    overridePrice: Optional[float] = None
    note: Optional[str] = None


class InquiryItem(BaseModel):
    planId: str
    carrierId: str
    countryId: str
    addedAt: datetime = Field(default_factory=datetime.utcnow)


class UserProfile(BaseModel):
    userId: str
    displayName: str = ""
    pictureUrl: Optional[str] = None
    cart: List[CartItem] = Field(default_factory=list)
    inquiryList: List[InquiryItem] = Field(default_factory=list)
    model_config = ConfigDict(extra="allow")


class CartAdd(BaseModel):
    planId: str = Field(min_length=1)
    quantity: int = Field(default=1, gt=0)
    overridePrice: Optional[float] = None
    note: Optional[str] = None


class InquiryAdd(BaseModel):
    planId: str = Field(min_length=1)
    carrierId: str = Field(min_length=1)
    countryId: str = Field(min_length=1)


class QuantityModify(BaseModel):
    quantity: int = Field(gt=0)


class ContactDetails(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    note: Optional[str] = None


class ListResponse(BaseModel):
    items: List[dict]
    error: Optional[str] = None

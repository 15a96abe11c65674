from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class DataType(str, Enum):
    countries = "countries"
    carriers = "carriers"
    plans = "plans"


class DataAdd(BaseModel):
    type: DataType
    data: Dict[str, Any]


class DataModify(BaseModel):
    type: DataType
    id: str = Field(min_length=1)
    data: Dict[str, Any]


class BatchAction(str, Enum):
    delete = "delete"
    duplicate = "duplicate"
    migrate = "migrate"


class BatchRequest(BaseModel):
    action: BatchAction
    planIds: List[str] = Field(min_length=1)
    targetCountryId: Optional[str] = None
    targetCountryName: Optional[str] = None


class BatchResult(BaseModel):
    success: bool = True
    processed: int = 0
    failed: int = 0
    newIds: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)


class PlanDuplicate(BaseModel):
    planId: str = Field(min_length=1)
    changes: Dict[str, Any] = Field(default_factory=dict)


class PlanMigrate(BaseModel):
    planId: str = Field(min_length=1)
    newCountryId: str = Field(min_length=1)
    newCountryName: str = Field(min_length=1)


class DuplicateStats(BaseModel):
    plansChecked: int = 0
    duplicatesFound: int = 0
    duplicatesDeleted: int = 0
    errors: int = 0


class DuplicateCleanupResult(BaseModel):
    success: bool
    message: str
    stats: DuplicateStats

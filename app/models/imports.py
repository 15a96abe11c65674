from typing import List

from pydantic import BaseModel, Field


class CountryImportResult(BaseModel):
    added: int = 0
    skipped: int = 0
    errors: List[str] = Field(default_factory=list)


class PlanImportResult(BaseModel):
    added: int = 0
    updated: int = 0
    skipped: int = 0
    errors: List[str] = Field(default_factory=list)


class ImportReport(BaseModel):
    countries: CountryImportResult = Field(default_factory=CountryImportResult)
    plans: PlanImportResult = Field(default_factory=PlanImportResult)

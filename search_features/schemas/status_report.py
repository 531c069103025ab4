from typing import List

from pydantic import BaseModel, Field


class ReportField(BaseModel):
    label: str
    value: str


class Report(BaseModel):
    title: str
    fields: List[ReportField] = Field(default_factory=list)


class StatusReportResponse(BaseModel):
    reports: List[Report]
    text: str  # what the "copy status report" button puts on the clipboard

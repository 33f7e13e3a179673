from typing import List

from pydantic import BaseModel, Field


class SummarySection(BaseModel):
    title: str
    points: List[str] = Field(default_factory=list)


class SummaryResult(BaseModel):
    tldr: str = ""
    sections: List[SummarySection] = Field(default_factory=list)

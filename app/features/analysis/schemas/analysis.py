from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class AnalyzeIn(BaseModel):
    # Optional so a missing url surfaces as 400 from the route, not 422
    url: Optional[str] = None


class Finding(BaseModel):
    title: str
    description: str
    score: Union[int, Literal["N/A"]]


class CategoryReport(BaseModel):
    score: Optional[int] = None
    reasons: list[Finding] = Field(default_factory=list, max_length=5)


class CategoryScores(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    performance: CategoryReport
    accessibility: CategoryReport
    best_practices: CategoryReport = Field(alias="bestPractices")


class AuditFailure(BaseModel):
    error: str = "Lighthouse analysis failed"
    message: str


class AnalysisResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str
    screenshot: str
    uiux_score: Union[float, Literal["unavailable"]] = Field(alias="uiuxScore")
    scores: Union[CategoryScores, AuditFailure]

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True)

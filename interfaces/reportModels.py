from datetime import datetime
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

from interfaces.productModels import ProductSummary
from utils.report_utils import completion_percentage, score_category

ReportStatus = Literal["draft", "pending", "completed"]


class AnalysisBreakdown(BaseModel):
    strengths: List[str] = []
    improvements: List[str] = []
    recommendations: List[str] = []


class ReportCreate(BaseModel):
    product_id: int
    answers: Dict[str, Any]

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ReportUpdate(BaseModel):
    summary: Optional[str] = Field(None, max_length=2000)
    transparency_score: Optional[int] = Field(None, ge=0, le=100)
    status: Optional[ReportStatus] = None
    answers: Optional[Dict[str, Any]] = None
    analysis: Optional[AnalysisBreakdown] = None
    pdf_url: Optional[str] = Field(None, max_length=500)

    @field_validator("summary", "transparency_score", "status", "answers", "analysis")
    @classmethod
    def reject_null(cls, value):
        # omit a field to keep it; only pdfUrl may be cleared
        if value is None:
            raise ValueError("Field cannot be null")
        return value

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ReportResponse(BaseModel):
    id: int
    product_id: int
    user_id: int
    summary: str
    transparency_score: int
    analysis: AnalysisBreakdown = AnalysisBreakdown()
    answers: Dict[str, Any] = {}
    pdf_url: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    product: Optional[ProductSummary] = None

    @computed_field(alias="scoreCategory")
    @property
    def score_category(self) -> str:
        return score_category(self.transparency_score)

    @computed_field(alias="completionPercentage")
    @property
    def completion_percentage(self) -> int:
        return completion_percentage(self.answers)

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class ScoreBucket(BaseModel):
    range: str
    min: int
    max: int
    count: int = 0


class StatsOverview(BaseModel):
    total_reports: int = 0
    average_score: float = 0
    max_score: int = 0
    min_score: int = 0
    completed_reports: int = 0
    pending_reports: int = 0
    draft_reports: int = 0

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ReportStats(BaseModel):
    overview: StatsOverview = StatsOverview()
    score_distribution: List[ScoreBucket] = []

    class Config:
        alias_generator = to_camel
        populate_by_name = True

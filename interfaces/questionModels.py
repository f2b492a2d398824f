from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, computed_field
from pydantic.alias_generators import to_camel

from utils.report_utils import formatted_question

QuestionType = Literal["text", "select", "multiselect"]


class GeneratedQuestion(BaseModel):
    """A question as produced by the AI service or the local fallback."""
    question_text: str = Field(..., min_length=1, max_length=500)
    question_type: QuestionType = "text"
    options: List[str] = []
    is_required: bool = False

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        str_strip_whitespace = True


class AnswerUpdate(BaseModel):
    answer: str = Field(..., max_length=1000)

    class Config:
        str_strip_whitespace = True


class QuestionResponse(BaseModel):
    id: int
    product_id: int
    question_text: str
    answer: Optional[str] = None
    question_type: str
    options: Optional[List[str]] = None
    is_required: bool = False
    order: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @computed_field(alias="formattedQuestion")
    @property
    def formatted_question(self) -> str:
        return formatted_question(self.order, self.question_text)

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True

from typing import Any, Dict, List
from pydantic import BaseModel, Field


class ProductData(BaseModel):
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    ingredients: List[str] = Field(..., min_length=1)

    class Config:
        extra = "allow"


class GenerateQuestionsRequest(BaseModel):
    productData: ProductData


class TransparencyScoreRequest(BaseModel):
    productData: Dict[str, Any]
    answers: Dict[str, Any]


class AnalyzeProductRequest(BaseModel):
    product: Dict[str, Any]
    answers: Dict[str, Any]

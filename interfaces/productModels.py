from datetime import datetime
from typing import Annotated, List, Literal, Optional
from pydantic import BaseModel, Field, StringConstraints, computed_field
from pydantic.alias_generators import to_camel

from utils.report_utils import ingredient_count

ProductCategory = Literal[
    "Skincare",
    "Food & Beverage",
    "Personal Care",
    "Cleaning Products",
    "Clothing",
    "Electronics",
    "Other",
]
IngredientName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
CertificationName = Annotated[str, StringConstraints(strip_whitespace=True, max_length=100)]


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    category: ProductCategory
    brand: str = Field(..., min_length=1, max_length=100)
    ingredients: List[IngredientName] = Field(..., min_length=1)
    description: Optional[str] = Field(None, max_length=1000)
    certifications: Optional[List[CertificationName]] = None
    packaging: Optional[str] = Field(None, max_length=200)
    sustainability: Optional[str] = Field(None, max_length=500)

    class Config:
        str_strip_whitespace = True


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    category: Optional[ProductCategory] = None
    brand: Optional[str] = Field(None, min_length=1, max_length=100)
    ingredients: Optional[List[IngredientName]] = Field(None, min_length=1)
    description: Optional[str] = Field(None, max_length=1000)
    certifications: Optional[List[CertificationName]] = None
    packaging: Optional[str] = Field(None, max_length=200)
    sustainability: Optional[str] = Field(None, max_length=500)

    class Config:
        str_strip_whitespace = True


class ProductSummary(BaseModel):
    """Product fields embedded in report responses."""
    id: int
    name: str
    brand: str
    category: str
    ingredients: List[str] = []
    description: Optional[str] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class ProductResponse(BaseModel):
    id: int
    name: str
    category: str
    brand: str
    ingredients: List[str] = []
    description: Optional[str] = None
    certifications: Optional[List[str]] = None
    packaging: Optional[str] = None
    sustainability: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @computed_field(alias="ingredientCount")
    @property
    def ingredient_count(self) -> int:
        return ingredient_count(self.ingredients)

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True

from typing import Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

EMAIL_PATTERN = r"^[\w.+-]+@[\w-]+(\.[\w-]+)*\.\w{2,}$"


class UserCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    password: str = Field(..., min_length=6)
    company: Optional[str] = Field(None, max_length=200)

    class Config:
        str_strip_whitespace = True

class LoginRequest(BaseModel):
    email: str = Field(..., pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1)


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    company: Optional[str] = Field(None, max_length=200)

    class Config:
        str_strip_whitespace = True


class TokenData(BaseModel):
    user_id: int | None = None


class Identity(BaseModel):
    """Who is calling: the only view of a user the report core consumes."""
    user_id: int
    role: str
    is_active: bool = True

    class Config:
        alias_generator = to_camel
        populate_by_name = True

from pydantic import BaseModel, EmailStr, Field, field_validator

from typing import Optional

from .roles import Role


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserCreate(BaseModel):
    name: str = Field(min_length=2)
    email: EmailStr
    password: str
    role: Role

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return normalize_email(v)


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    role: Role

    class Config:
        from_attributes = True


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AuthenticatedIdentity(BaseModel):
    """Decoded claims of a verified access token."""
    user_id: int
    username: str
    role: Role


# Products
class ProductCreate(BaseModel):
    title: str = Field(min_length=2)
    price: float = Field(gt=0)


class ProductOut(BaseModel):
    id: int
    title: str
    price: float
    is_active: bool
    creator: Optional[UserOut] = None

    class Config:
        from_attributes = True

from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserBase(BaseModel):
    name: str = Field(min_length=2, max_length=50)
    email: EmailStr


class UserCreate(UserBase):
    password: str = Field(min_length=6)
    role: Literal["admin", "faculty"] = "faculty"


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class UserOut(UserBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    role: str
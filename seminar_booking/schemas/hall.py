from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from seminar_booking.schemas.booking import OUTPUT_CONFIG, CamelModel


class HallFields(CamelModel):
    name: Optional[str] = Field(default=None, min_length=3, max_length=100)
    capacity: Optional[int] = Field(default=None, ge=1, le=1000)
    equipment: Optional[List[str]] = None
    image_url: Optional[str] = None
    image_hint: Optional[str] = Field(default=None, min_length=2, max_length=50)

    @field_validator("name", "image_hint")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if v is not None else v

    @field_validator("equipment")
    @classmethod
    def check_equipment(cls, v):
        if v is None:
            return v
        items = [item.strip() for item in v]
        if not items:
            raise ValueError("At least one equipment item is required")
        if any(not item for item in items):
            raise ValueError("Equipment items cannot be empty")
        return items

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, v):
        if not v:
            return v
        # Remote URLs and inline base64 uploads are both accepted
        if v.startswith("data:image/") or v.startswith(("http://", "https://")):
            return v
        raise ValueError("Please provide a valid image URL or upload an image")


class HallCreate(HallFields):
    name: str = Field(min_length=3, max_length=100)
    capacity: int = Field(ge=1, le=1000)
    equipment: List[str]


class HallUpdate(HallFields):
    pass


class HallOut(BaseModel):
    model_config = OUTPUT_CONFIG

    id: int
    name: str
    capacity: int
    equipment: List[str]
    image_url: str
    image_hint: Optional[str] = None
    created_at: datetime
    updated_at: datetime

import datetime as dt
from typing import Optional

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

TIME_REGEX = r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$"


class CamelModel(BaseModel):
    # Wire format keeps the camelCase names the frontend already uses
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Read from ORM attributes by field name, dump with camelCase keys
OUTPUT_CONFIG = ConfigDict(
    alias_generator=AliasGenerator(serialization_alias=to_camel), from_attributes=True
)


class SlotQuery(CamelModel):
    hall_id: int
    date: dt.date
    start_time: str = Field(pattern=TIME_REGEX)
    end_time: str = Field(pattern=TIME_REGEX)


class ConflictCheck(SlotQuery):
    exclude_booking_id: Optional[int] = None


class BookingCreate(SlotQuery):
    purpose: str = Field(min_length=5, max_length=500)


class BookingUpdate(CamelModel):
    date: Optional[dt.date] = None
    start_time: Optional[str] = Field(default=None, pattern=TIME_REGEX)
    end_time: Optional[str] = Field(default=None, pattern=TIME_REGEX)
    purpose: Optional[str] = Field(default=None, min_length=5, max_length=500)


class BookingStatusUpdate(CamelModel):
    status: str


class BookingOut(BaseModel):
    model_config = OUTPUT_CONFIG

    id: int
    hall_id: Optional[int]
    hall_name: str
    faculty_id: int
    faculty_name: str
    date: dt.date
    start_time: str
    end_time: str
    purpose: str
    status: str
    created_at: dt.datetime
    updated_at: dt.datetime

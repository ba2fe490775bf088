from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from seminar_booking.core.dependencies import get_db, get_lifecycle, get_requester
from seminar_booking.core.errors import NotFoundError
from seminar_booking.models.booking import Booking
from seminar_booking.repos.bookings import BookingRepository
from seminar_booking.repos.halls import HallRepository
from seminar_booking.schemas.booking import (
    BookingCreate,
    BookingOut,
    BookingStatusUpdate,
    BookingUpdate,
    ConflictCheck,
)
from seminar_booking.services.lifecycle import BookingLifecycleManager, Requester
from seminar_booking.services.slots import free_slots

router = APIRouter(prefix="/bookings", tags=["Bookings"])


def _out(booking: Booking):
    return BookingOut.model_validate(booking).model_dump(by_alias=True, mode="json")


# ---------------------------------------------------------------------
# LIST BOOKINGS
# ---------------------------------------------------------------------
@router.get("/")
def list_bookings(
    status: Optional[str] = None,
    hall_id: Optional[int] = Query(default=None, alias="hallId"),
    faculty_id: Optional[int] = Query(default=None, alias="facultyId"),
    start_date: Optional[date] = Query(default=None, alias="startDate"),
    end_date: Optional[date] = Query(default=None, alias="endDate"),
    requester: Requester = Depends(get_requester),
    lifecycle: BookingLifecycleManager = Depends(get_lifecycle),
):
    bookings = lifecycle.list_bookings(
        requester,
        status=status,
        hall_id=hall_id,
        faculty_id=faculty_id,
        start_date=start_date,
        end_date=end_date,
    )
    return {"bookings": [_out(b) for b in bookings]}


# ---------------------------------------------------------------------
# CONFLICT CHECK
# ---------------------------------------------------------------------
@router.post("/check-conflict")
def check_conflict(
    data: ConflictCheck,
    _: Requester = Depends(get_requester),
    lifecycle: BookingLifecycleManager = Depends(get_lifecycle),
):
    conflict = lifecycle.check_conflict(
        data.hall_id, data.date, data.start_time, data.end_time, data.exclude_booking_id
    )
    return {"conflict": conflict}


# ---------------------------------------------------------------------
# AVAILABLE TIME SLOTS
# ---------------------------------------------------------------------
@router.get("/hall/{hall_id}/available-slots")
def available_slots(
    hall_id: int,
    day: date = Query(alias="date"),
    _: Requester = Depends(get_requester),
    db: Session = Depends(get_db),
):
    if not HallRepository(db).find_hall_by_id(hall_id):
        raise NotFoundError("Hall not found")

    bookings = BookingRepository(db).find_active_on_day(hall_id, day)
    return {
        "hallId": hall_id,
        "date": day.isoformat(),
        "availableSlots": free_slots(bookings),
    }


# ---------------------------------------------------------------------
# GET BOOKING
# ---------------------------------------------------------------------
@router.get("/{booking_id}")
def get_booking(
    booking_id: int,
    requester: Requester = Depends(get_requester),
    lifecycle: BookingLifecycleManager = Depends(get_lifecycle),
):
    return {"booking": _out(lifecycle.get(booking_id, requester))}


# ---------------------------------------------------------------------
# CREATE BOOKING
# ---------------------------------------------------------------------
@router.post("/", status_code=201)
def create_booking(
    data: BookingCreate,
    requester: Requester = Depends(get_requester),
    lifecycle: BookingLifecycleManager = Depends(get_lifecycle),
):
    booking = lifecycle.create(
        data.hall_id, data.date, data.start_time, data.end_time, data.purpose, requester
    )
    return {"message": "Booking created successfully", "booking": _out(booking)}


# ---------------------------------------------------------------------
# UPDATE BOOKING
# ---------------------------------------------------------------------
@router.put("/{booking_id}")
def update_booking(
    booking_id: int,
    data: BookingUpdate,
    requester: Requester = Depends(get_requester),
    lifecycle: BookingLifecycleManager = Depends(get_lifecycle),
):
    patch = data.model_dump(exclude_none=True)
    booking = lifecycle.update(booking_id, patch, requester)
    return {"message": "Booking updated successfully", "booking": _out(booking)}


# ---------------------------------------------------------------------
# UPDATE STATUS (ADMIN)
# ---------------------------------------------------------------------
@router.patch("/{booking_id}/status")
def update_booking_status(
    booking_id: int,
    data: BookingStatusUpdate,
    requester: Requester = Depends(get_requester),
    lifecycle: BookingLifecycleManager = Depends(get_lifecycle),
):
    booking = lifecycle.update_status(booking_id, data.status, requester)
    return {"message": "Booking status updated successfully", "booking": _out(booking)}


# ---------------------------------------------------------------------
# DELETE BOOKING
# ---------------------------------------------------------------------
@router.delete("/{booking_id}")
def delete_booking(
    booking_id: int,
    requester: Requester = Depends(get_requester),
    lifecycle: BookingLifecycleManager = Depends(get_lifecycle),
):
    lifecycle.delete(booking_id, requester)
    return {"message": "Booking deleted successfully"}

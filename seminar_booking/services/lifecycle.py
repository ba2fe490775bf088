"""Booking lifecycle: create, edit, decide, cancel.

Every booking starts ``Pending``. Only admins move it to ``Approved`` or
``Rejected``. Faculty members may edit their own bookings while they are
still pending and may cancel their own bookings at any status; admins may do
both to any booking.

The conflict check and the write that follows it run under a per
``(hall, date)`` lock, so two requests racing for the same slot inside one
process cannot both pass the check.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date

from seminar_booking.core.config import RECHECK_CONFLICT_ON_APPROVE
from seminar_booking.core.errors import (
    SLOT_TAKEN,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from seminar_booking.core.logging_config import get_logger
from seminar_booking.core.metrics import record_booking, record_conflict
from seminar_booking.models.booking import Booking
from seminar_booking.models.enums import BookingStatus, UserRole
from seminar_booking.repos.bookings import BookingRepository
from seminar_booking.repos.halls import HallRepository
from seminar_booking.services.conflicts import BookingConflictChecker
from seminar_booking.services.timeutils import (
    normalize_time,
    to_minutes,
    validate_not_past,
    validate_range,
)

logger = get_logger()

EDITABLE_FIELDS = ("date", "start_time", "end_time", "purpose")
PURPOSE_MIN, PURPOSE_MAX = 5, 500


@dataclass(frozen=True)
class Requester:
    user_id: int
    role: str
    name: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


class SlotLocks:
    """Process-local mutex per ``(hall_id, date)``; entries vanish when unused."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[tuple, list] = {}

    @contextmanager
    def hold(self, hall_id: int, day: date):
        key = (hall_id, day)
        with self._guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]


# Shared by every manager in the process; managers are built per request
slot_locks = SlotLocks()


def clean_purpose(purpose: str) -> str:
    text = (purpose or "").strip()
    if not PURPOSE_MIN <= len(text) <= PURPOSE_MAX:
        raise ValidationError(
            f"Purpose must be between {PURPOSE_MIN} and {PURPOSE_MAX} characters"
        )
    return text


def parse_status(value) -> BookingStatus:
    try:
        return BookingStatus(value)
    except ValueError:
        raise ValidationError("Status must be Pending, Approved, or Rejected")


class BookingLifecycleManager:
    def __init__(
        self,
        bookings: BookingRepository,
        halls: HallRepository,
        checker: BookingConflictChecker | None = None,
        locks: SlotLocks | None = None,
        recheck_on_approve: bool = RECHECK_CONFLICT_ON_APPROVE,
    ):
        self.bookings = bookings
        self.halls = halls
        self.checker = checker or BookingConflictChecker(bookings)
        self.locks = locks or slot_locks
        self.recheck_on_approve = recheck_on_approve

    # ---------------------------------------------------------------------
    # HELPERS
    # ---------------------------------------------------------------------
    def _load(self, booking_id: int) -> Booking:
        booking = self.bookings.find_by_id(booking_id)
        if not booking:
            raise NotFoundError("Booking not found")
        return booking

    @staticmethod
    def _require_owner(booking: Booking, requester: Requester, action: str):
        if not requester.is_admin and booking.faculty_id != requester.user_id:
            raise ForbiddenError(f"Can only {action} your own bookings")

    # ---------------------------------------------------------------------
    # CHECK CONFLICT
    # ---------------------------------------------------------------------
    def check_conflict(
        self,
        hall_id: int,
        day: date,
        start_time: str,
        end_time: str,
        exclude_booking_id: int | None = None,
    ) -> bool:
        start, end = validate_range(start_time, end_time)
        return self.checker.has_conflict(hall_id, day, start, end, exclude_booking_id)

    # ---------------------------------------------------------------------
    # CREATE
    # ---------------------------------------------------------------------
    def create(
        self,
        hall_id: int,
        day: date,
        start_time: str,
        end_time: str,
        purpose: str,
        requester: Requester,
        today: date | None = None,
    ) -> Booking:
        start, end = validate_range(start_time, end_time)
        validate_not_past(day, today)
        purpose = clean_purpose(purpose)

        hall = self.halls.find_hall_by_id(hall_id)
        if not hall:
            raise NotFoundError("Hall not found")

        with self.locks.hold(hall_id, day):
            if self.checker.has_conflict(hall_id, day, start, end):
                logger.bind(log_type="booking").info(
                    f"Booking rejected (conflict) | Hall={hall_id} | {day} {start}-{end}"
                )
                record_conflict()
                raise ConflictError(SLOT_TAKEN)

            booking = self.bookings.insert(
                Booking(
                    hall_id=hall_id,
                    hall_name=hall.name,
                    faculty_id=requester.user_id,
                    faculty_name=requester.name,
                    date=day,
                    start_time=start,
                    end_time=end,
                    purpose=purpose,
                    status=BookingStatus.PENDING.value,
                )
            )

        record_booking(booking.status)
        logger.bind(log_type="booking").info(
            f"Booking Created | Id={booking.id} | Faculty={requester.user_id} "
            f"| Hall={hall_id} | {day} {start}-{end}"
        )
        return booking

    # ---------------------------------------------------------------------
    # READ
    # ---------------------------------------------------------------------
    def get(self, booking_id: int, requester: Requester) -> Booking:
        booking = self._load(booking_id)
        self._require_owner(booking, requester, "view")
        return booking

    def list_bookings(
        self,
        requester: Requester,
        status: str | None = None,
        hall_id: int | None = None,
        faculty_id: int | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[Booking]:
        if status:
            status = parse_status(status).value

        if not requester.is_admin:
            if faculty_id is not None and faculty_id != requester.user_id:
                raise ForbiddenError("Can only view your own bookings")
            faculty_id = requester.user_id

        return self.bookings.find(
            status=status,
            hall_id=hall_id,
            faculty_id=faculty_id,
            start_date=start_date,
            end_date=end_date,
        )

    # ---------------------------------------------------------------------
    # UPDATE
    # ---------------------------------------------------------------------
    def update(
        self,
        booking_id: int,
        patch: dict,
        requester: Requester,
        today: date | None = None,
    ) -> Booking:
        unknown = set(patch) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

        booking = self._load(booking_id)
        self._require_owner(booking, requester, "update")
        if not requester.is_admin and booking.status != BookingStatus.PENDING.value:
            raise ForbiddenError("Can only update pending bookings")

        changes = {}
        if patch.get("purpose") is not None:
            changes["purpose"] = clean_purpose(patch["purpose"])
        if patch.get("date") is not None:
            validate_not_past(patch["date"], today)
            changes["date"] = patch["date"]
        if patch.get("start_time") is not None:
            changes["start_time"] = normalize_time(patch["start_time"])
        if patch.get("end_time") is not None:
            changes["end_time"] = normalize_time(patch["end_time"])

        reschedule = any(k in changes for k in ("date", "start_time", "end_time"))
        if not reschedule:
            updated = self.bookings.update_fields(booking_id, changes)
        else:
            if booking.hall_id is None:
                raise NotFoundError("Hall not found")
            day = changes.get("date", booking.date)
            start = changes.get("start_time", booking.start_time)
            end = changes.get("end_time", booking.end_time)
            if to_minutes(end) <= to_minutes(start):
                raise ValidationError("End time must be after start time")

            with self.locks.hold(booking.hall_id, day):
                if self.checker.has_conflict(booking.hall_id, day, start, end, booking_id):
                    record_conflict()
                    raise ConflictError(SLOT_TAKEN)
                updated = self.bookings.update_fields(booking_id, changes)

        if not updated:
            raise NotFoundError("Booking not found")

        logger.bind(log_type="booking").info(
            f"Booking Updated | Id={booking_id} | By={requester.user_id} | Fields={sorted(changes)}"
        )
        return updated

    # ---------------------------------------------------------------------
    # STATUS
    # ---------------------------------------------------------------------
    def update_status(self, booking_id: int, new_status, requester: Requester) -> Booking:
        if not requester.is_admin:
            raise ForbiddenError("Admin access required")

        status = parse_status(new_status)
        booking = self._load(booking_id)
        previous = booking.status

        if self.recheck_on_approve and status is BookingStatus.APPROVED and booking.hall_id:
            with self.locks.hold(booking.hall_id, booking.date):
                if self.checker.has_conflict(
                    booking.hall_id, booking.date, booking.start_time, booking.end_time, booking_id
                ):
                    record_conflict()
                    raise ConflictError(SLOT_TAKEN)
                updated = self.bookings.update_fields(booking_id, {"status": status.value})
        else:
            updated = self.bookings.update_fields(booking_id, {"status": status.value})

        if not updated:
            raise NotFoundError("Booking not found")

        record_booking(status.value)
        logger.bind(log_type="admin").info(
            f"Booking {booking_id} marked {status.value} by admin {requester.user_id}"
        )
        logger.bind(log_type="booking").info(
            f"Booking Status | Id={booking_id} | {previous} -> {status.value}"
        )
        return updated

    # ---------------------------------------------------------------------
    # DELETE
    # ---------------------------------------------------------------------
    def delete(self, booking_id: int, requester: Requester):
        booking = self._load(booking_id)
        self._require_owner(booking, requester, "delete")

        if not self.bookings.delete_by_id(booking_id):
            raise NotFoundError("Booking not found")

        logger.bind(log_type="booking").info(
            f"Booking Deleted | Id={booking_id} | By={requester.user_id}"
        )

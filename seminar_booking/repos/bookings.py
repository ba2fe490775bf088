"""SQLAlchemy-backed persistence for bookings."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from seminar_booking.core.errors import PersistenceError
from seminar_booking.core.logging_config import get_logger
from seminar_booking.db.session import utcnow
from seminar_booking.models.booking import Booking
from seminar_booking.models.enums import BookingStatus

logger = get_logger()


@contextmanager
def storage_errors(db: Session, action: str):
    """Roll back and re-raise driver failures as PersistenceError."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Storage failure while {action}: {e}")
        raise PersistenceError(f"Storage failure while {action}") from e


class BookingRepository:
    def __init__(self, db: Session):
        self.db = db

    # ---------------------------------------------------------------------
    # READS
    # ---------------------------------------------------------------------
    def find_by_id(self, booking_id: int) -> Booking | None:
        with storage_errors(self.db, "loading booking"):
            return self.db.get(Booking, booking_id)

    def find_active_on_day(
        self, hall_id: int, day: date, exclude_booking_id: int | None = None
    ) -> list[Booking]:
        """Non-rejected bookings of one hall on one calendar day."""
        with storage_errors(self.db, "checking conflicts"):
            query = self.db.query(Booking).filter(
                Booking.hall_id == hall_id,
                Booking.date == day,
                Booking.status != BookingStatus.REJECTED.value,
            )
            if exclude_booking_id is not None:
                query = query.filter(Booking.id != exclude_booking_id)
            return query.order_by(Booking.start_time).all()

    def find(
        self,
        status: str | None = None,
        hall_id: int | None = None,
        faculty_id: int | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[Booking]:
        with storage_errors(self.db, "listing bookings"):
            query = self.db.query(Booking)
            if status:
                query = query.filter(Booking.status == status)
            if hall_id is not None:
                query = query.filter(Booking.hall_id == hall_id)
            if faculty_id is not None:
                query = query.filter(Booking.faculty_id == faculty_id)
            if start_date and end_date:
                query = query.filter(Booking.date >= start_date, Booking.date <= end_date)
            return query.order_by(Booking.date.desc(), Booking.start_time.asc()).all()

    def count(self, status: str | None = None, day: date | None = None) -> int:
        with storage_errors(self.db, "counting bookings"):
            query = self.db.query(Booking)
            if status:
                query = query.filter(Booking.status == status)
            if day:
                query = query.filter(Booking.date == day)
            return query.count()

    # ---------------------------------------------------------------------
    # WRITES
    # ---------------------------------------------------------------------
    def insert(self, booking: Booking) -> Booking:
        with storage_errors(self.db, "saving booking"):
            self.db.add(booking)
            self.db.commit()
            self.db.refresh(booking)
            return booking

    def update_fields(self, booking_id: int, patch: dict) -> Booking | None:
        with storage_errors(self.db, "updating booking"):
            booking = self.db.get(Booking, booking_id)
            if not booking:
                return None
            for field, value in patch.items():
                setattr(booking, field, value)
            booking.updated_at = utcnow()
            self.db.commit()
            self.db.refresh(booking)
            return booking

    def delete_by_id(self, booking_id: int) -> bool:
        with storage_errors(self.db, "deleting booking"):
            deleted = self.db.query(Booking).filter(Booking.id == booking_id).delete()
            self.db.commit()
            return deleted > 0

    def delete_all(self) -> int:
        with storage_errors(self.db, "clearing bookings"):
            deleted = self.db.query(Booking).delete()
            self.db.commit()
            return deleted

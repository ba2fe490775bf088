from __future__ import annotations

from sqlalchemy import String, cast, func, or_, update
from sqlalchemy.orm import Session

from seminar_booking.models.booking import Booking
from seminar_booking.models.hall import Hall
from seminar_booking.repos.bookings import storage_errors


class HallRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_hall_by_id(self, hall_id: int) -> Hall | None:
        with storage_errors(self.db, "loading hall"):
            return self.db.get(Hall, hall_id)

    def find_by_name(self, name: str, exclude_id: int | None = None) -> Hall | None:
        with storage_errors(self.db, "loading hall"):
            query = self.db.query(Hall).filter(func.lower(Hall.name) == name.lower())
            if exclude_id is not None:
                query = query.filter(Hall.id != exclude_id)
            return query.first()

    def search(
        self,
        search: str | None = None,
        min_capacity: int | None = None,
        max_capacity: int | None = None,
    ) -> list[Hall]:
        """Halls whose name or equipment text contains ``search``, within the capacity bounds.

        The equipment match runs against the serialised JSON column, so callers
        needing an exact per-item match re-check the returned rows.
        """
        with storage_errors(self.db, "searching halls"):
            query = self.db.query(Hall)

            if search:
                needle = search.lower()
                name = func.lower(Hall.name, type_=String)
                equipment = func.lower(cast(Hall.equipment, String), type_=String)
                query = query.filter(
                    or_(
                        name.contains(needle, autoescape=True),
                        equipment.contains(needle, autoescape=True),
                    )
                )
            if min_capacity is not None:
                query = query.filter(Hall.capacity >= min_capacity)
            if max_capacity is not None:
                query = query.filter(Hall.capacity <= max_capacity)

            return query.order_by(Hall.name).all()

    def count(self) -> int:
        with storage_errors(self.db, "counting halls"):
            return self.db.query(Hall).count()

    def save(self, hall: Hall) -> Hall:
        with storage_errors(self.db, "saving hall"):
            self.db.add(hall)
            self.db.commit()
            self.db.refresh(hall)
            return hall

    def delete(self, hall: Hall):
        # Bookings outlive their hall; detach them so a reused id starts clean
        with storage_errors(self.db, "deleting hall"):
            self.db.execute(
                update(Booking).where(Booking.hall_id == hall.id).values(hall_id=None)
            )
            self.db.delete(hall)
            self.db.commit()

    def delete_all(self) -> int:
        with storage_errors(self.db, "clearing halls"):
            self.db.execute(
                update(Booking).where(Booking.hall_id.is_not(None)).values(hall_id=None)
            )
            deleted = self.db.query(Hall).delete()
            self.db.commit()
            return deleted

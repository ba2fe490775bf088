from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Index
from seminar_booking.db.session import Base, utcnow


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)

    # Halls may be deleted later; the booking keeps its hall_name snapshot
    hall_id = Column(Integer, ForeignKey("halls.id", ondelete="SET NULL"), nullable=True)
    hall_name = Column(String(100), nullable=False)

    faculty_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    faculty_name = Column(String(50), nullable=False)

    date = Column(Date, nullable=False)
    start_time = Column(String(5), nullable=False)  # zero-padded HH:MM
    end_time = Column(String(5), nullable=False)

    purpose = Column(String(500), nullable=False)
    status = Column(String(20), nullable=False, default="Pending")

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        Index("ix_bookings_slot", "hall_id", "date", "start_time", "end_time"),
        Index("ix_bookings_faculty_date", "faculty_id", "date"),
        Index("ix_bookings_status_date", "status", "date"),
    )

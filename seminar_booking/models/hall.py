from sqlalchemy import Column, Integer, String, DateTime, JSON

from seminar_booking.db.session import Base, utcnow

DEFAULT_IMAGE_URL = "https://placehold.co/600x400.png"


class Hall(Base):
    __tablename__ = "halls"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(100), unique=True, index=True, nullable=False)
    capacity = Column(Integer, nullable=False)
    equipment = Column(JSON, nullable=False)

    # Image metadata
    image_url = Column(String, nullable=False, default=DEFAULT_IMAGE_URL)
    image_hint = Column(String(50), nullable=True)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

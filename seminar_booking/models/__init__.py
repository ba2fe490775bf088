from seminar_booking.models.user import User
from seminar_booking.models.hall import Hall
from seminar_booking.models.booking import Booking

__all__ = ["User", "Hall", "Booking"]

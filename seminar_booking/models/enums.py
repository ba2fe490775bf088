from enum import Enum


class BookingStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class UserRole(str, Enum):
    ADMIN = "admin"
    FACULTY = "faculty"

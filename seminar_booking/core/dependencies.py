from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from seminar_booking.db.session import SessionLocal
from seminar_booking.core.errors import AuthenticationError, ForbiddenError
from seminar_booking.core.jwt import decode_access_token
from seminar_booking.models.enums import UserRole
from seminar_booking.repos.bookings import BookingRepository
from seminar_booking.repos.halls import HallRepository
from seminar_booking.repos.users import UserRepository
from seminar_booking.services.lifecycle import BookingLifecycleManager, Requester

security = HTTPBearer(auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db)
):
    if credentials is None:
        raise AuthenticationError("Access token required")

    payload = decode_access_token(credentials.credentials)

    try:
        user_id = int(payload["sub"])
    except ValueError:
        raise AuthenticationError("Invalid token payload")

    # Always re-read the user so role changes and deletions apply immediately
    user = UserRepository(db).find_by_id(user_id)
    if not user:
        raise AuthenticationError("User not found")

    return user


def get_requester(user=Depends(get_current_user)) -> Requester:
    return Requester(user_id=user.id, role=user.role, name=user.name)


def require_admin(requester: Requester = Depends(get_requester)) -> Requester:
    if requester.role != UserRole.ADMIN.value:
        raise ForbiddenError("Admin access required")
    return requester


def get_lifecycle(db: Session = Depends(get_db)) -> BookingLifecycleManager:
    return BookingLifecycleManager(BookingRepository(db), HallRepository(db))

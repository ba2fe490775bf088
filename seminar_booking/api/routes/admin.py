from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from seminar_booking.core.dependencies import get_db, require_admin
from seminar_booking.core.logging_config import get_logger
from seminar_booking.core.redis import delete_cache_prefix
from seminar_booking.models.enums import BookingStatus
from seminar_booking.repos.bookings import BookingRepository
from seminar_booking.repos.halls import HallRepository
from seminar_booking.repos.users import UserRepository
from seminar_booking.services.lifecycle import Requester

router = APIRouter(prefix="/admin", tags=["Admin"])
admin_log = get_logger("admin")


# =====================================================================
# DASHBOARD STATS
# =====================================================================
@router.get("/stats")
def admin_stats(_: Requester = Depends(require_admin), db: Session = Depends(get_db)):
    bookings = BookingRepository(db)

    return {
        "total_halls": HallRepository(db).count(),
        "total_users": UserRepository(db).count(),
        "total_bookings": bookings.count(),
        "bookings_by_status": {
            s.value: bookings.count(status=s.value) for s in BookingStatus
        },
        "today_bookings": bookings.count(day=date.today()),
    }


# =====================================================================
# CLEANUP (removes every booking and hall, keeps accounts)
# =====================================================================
@router.delete("/cleanup")
def cleanup(admin: Requester = Depends(require_admin), db: Session = Depends(get_db)):
    deleted_bookings = BookingRepository(db).delete_all()
    deleted_halls = HallRepository(db).delete_all()
    delete_cache_prefix("halls:")

    admin_log.warning(
        f"Cleanup by admin {admin.user_id} | bookings={deleted_bookings} | halls={deleted_halls}"
    )

    return {
        "message": "Database cleanup completed successfully",
        "deleted": {"bookings": deleted_bookings, "halls": deleted_halls},
    }

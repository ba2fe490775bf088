from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from seminar_booking.core.config import HALL_CACHE_TTL
from seminar_booking.core.dependencies import get_db, require_admin
from seminar_booking.core.errors import ConflictError, NotFoundError
from seminar_booking.core.logging_config import get_logger
from seminar_booking.core.redis import delete_cache_prefix, get_cache, set_cache
from seminar_booking.models.hall import DEFAULT_IMAGE_URL, Hall
from seminar_booking.repos.halls import HallRepository
from seminar_booking.schemas.hall import HallCreate, HallOut, HallUpdate
from seminar_booking.services.lifecycle import Requester

router = APIRouter(prefix="/halls", tags=["Halls"])
admin_log = get_logger("admin")

CACHE_PREFIX = "halls:list:"


def _out(hall: Hall):
    return HallOut.model_validate(hall).model_dump(by_alias=True, mode="json")


def filter_halls(
    halls: list[Hall],
    search: Optional[str] = None,
    equipment: Optional[str] = None,
) -> list[Hall]:
    """Exact per-item checks on rows already narrowed by ``HallRepository.search``."""
    result = halls

    if search:
        needle = search.lower()
        result = [
            h for h in result
            if needle in h.name.lower() or any(needle in item.lower() for item in h.equipment)
        ]

    if equipment:
        wanted = [e.strip() for e in equipment.split(",") if e.strip()]
        result = [h for h in result if all(w in h.equipment for w in wanted)]

    return result


# =====================================================================
# LIST HALLS
# =====================================================================
@router.get("/")
def list_halls(
    search: Optional[str] = None,
    min_capacity: Optional[int] = None,
    max_capacity: Optional[int] = None,
    equipment: Optional[str] = None,
    db: Session = Depends(get_db),
):
    cache_key = f"{CACHE_PREFIX}{search}|{min_capacity}|{max_capacity}|{equipment}"
    cached = get_cache(cache_key)
    if cached is not None:
        return {"halls": cached}

    halls = filter_halls(
        HallRepository(db).search(search, min_capacity, max_capacity), search, equipment
    )
    payload = [_out(h) for h in halls]

    set_cache(cache_key, payload, ttl=HALL_CACHE_TTL)
    return {"halls": payload}


# =====================================================================
# GET HALL
# =====================================================================
@router.get("/{hall_id}")
def get_hall(hall_id: int, db: Session = Depends(get_db)):
    hall = HallRepository(db).find_hall_by_id(hall_id)
    if not hall:
        raise NotFoundError("Hall not found")
    return {"hall": _out(hall)}


# =====================================================================
# CREATE HALL  (Admin Only)
# =====================================================================
@router.post("/", status_code=201)
def create_hall(
    data: HallCreate,
    admin: Requester = Depends(require_admin),
    db: Session = Depends(get_db),
):
    halls = HallRepository(db)

    if halls.find_by_name(data.name):
        raise ConflictError("Hall with this name already exists")

    hall = halls.save(
        Hall(
            name=data.name,
            capacity=data.capacity,
            equipment=data.equipment,
            image_url=data.image_url or DEFAULT_IMAGE_URL,
            image_hint=data.image_hint,
        )
    )
    delete_cache_prefix(CACHE_PREFIX)

    admin_log.info(f"Hall Created | Id={hall.id} | By={admin.user_id}")
    return {"message": "Hall created successfully", "hall": _out(hall)}


# =====================================================================
# UPDATE HALL  (Admin Only, partial)
# =====================================================================
@router.put("/{hall_id}")
def update_hall(
    hall_id: int,
    data: HallUpdate,
    admin: Requester = Depends(require_admin),
    db: Session = Depends(get_db),
):
    halls = HallRepository(db)

    hall = halls.find_hall_by_id(hall_id)
    if not hall:
        raise NotFoundError("Hall not found")

    if data.name and halls.find_by_name(data.name, exclude_id=hall_id):
        raise ConflictError("Hall with this name already exists")

    # Only fields present in the request are touched
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(hall, field, value)

    hall = halls.save(hall)
    delete_cache_prefix(CACHE_PREFIX)

    admin_log.info(f"Hall Updated | Id={hall.id} | By={admin.user_id}")
    return {"message": "Hall updated successfully", "hall": _out(hall)}


# =====================================================================
# DELETE HALL  (Admin Only)
# =====================================================================
@router.delete("/{hall_id}")
def delete_hall(
    hall_id: int,
    admin: Requester = Depends(require_admin),
    db: Session = Depends(get_db),
):
    halls = HallRepository(db)

    hall = halls.find_hall_by_id(hall_id)
    if not hall:
        raise NotFoundError("Hall not found")

    halls.delete(hall)
    delete_cache_prefix(CACHE_PREFIX)

    admin_log.info(f"Hall Deleted | Id={hall_id} | By={admin.user_id}")
    return {"message": "Hall deleted successfully"}

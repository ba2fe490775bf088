from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from seminar_booking.core.dependencies import get_db, get_current_user, require_admin
from seminar_booking.core.errors import AuthenticationError, ConflictError
from seminar_booking.core.jwt import create_access_token
from seminar_booking.core.logging_config import get_logger
from seminar_booking.core.security import hash_password, verify_password
from seminar_booking.models.user import User
from seminar_booking.repos.users import UserRepository
from seminar_booking.schemas.user import UserCreate, UserLogin, UserOut

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = get_logger()


def _user_payload(user: User):
    return UserOut.model_validate(user).model_dump()


# =====================================================================
#                               REGISTER
# =====================================================================
@router.post("/register", status_code=201)
def register(data: UserCreate, db: Session = Depends(get_db)):
    users = UserRepository(db)
    email = data.email.lower()

    if users.find_by_email(email):
        raise ConflictError("User with this email already exists")

    user = users.insert(
        User(
            name=data.name.strip(),
            email=email,
            password_hash=hash_password(data.password),
            role=data.role,
        )
    )

    logger.info(f"User registered | Id={user.id} | Role={user.role}")

    return {
        "message": "User registered successfully",
        "user": _user_payload(user),
        "token": create_access_token(user),
    }


# =====================================================================
#                                LOGIN
# =====================================================================
@router.post("/login")
def login(data: UserLogin, db: Session = Depends(get_db)):
    user = UserRepository(db).find_by_email(data.email)

    if not user or not verify_password(data.password, user.password_hash):
        raise AuthenticationError("Invalid email or password")

    return {
        "message": "Login successful",
        "user": _user_payload(user),
        "token": create_access_token(user),
    }


# =====================================================================
#                             CURRENT USER
# =====================================================================
@router.get("/me")
def me(user: User = Depends(get_current_user)):
    return {"user": _user_payload(user)}


# =====================================================================
#                          ALL USERS (ADMIN)
# =====================================================================
@router.get("/users", response_model=list[UserOut])
def list_users(_=Depends(require_admin), db: Session = Depends(get_db)):
    return UserRepository(db).list_all()

from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError

from seminar_booking.core.config import (
    JWT_SECRET,
    JWT_ALGORITHM,
    ACCESS_TOKEN_EXPIRE_MINUTES,
)
from seminar_booking.core.errors import AuthenticationError


# -------- CREATE TOKEN --------
def create_access_token(user, expires_delta: int | None = None):
    """Generate JWT token carrying the user id and role"""
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=expires_delta if expires_delta else ACCESS_TOKEN_EXPIRE_MINUTES
    )
    to_encode = {
        "sub": str(user.id),
        "role": user.role,
        "email": user.email,
        "name": user.name,
        "exp": expire,
    }
    return jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALGORITHM)


# -------- DECODE TOKEN --------
def decode_access_token(token: str):
    """Decode JWT and return the payload"""
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except JWTError:
        raise AuthenticationError("Invalid or expired token")

    if "sub" not in payload or "role" not in payload:
        raise AuthenticationError("Invalid token payload")

    return payload

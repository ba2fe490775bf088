import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# -------- DATABASE --------
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./seminar_booking.db")

# -------- AUTH --------
JWT_SECRET = os.getenv("JWT_SECRET", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24 * 7))

# -------- CACHE --------
REDIS_URL = os.getenv("REDIS_URL")
HALL_CACHE_TTL = int(os.getenv("HALL_CACHE_TTL", 60))

# -------- LOGGING --------
LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_RETENTION_WEEKS = int(os.getenv("LOG_RETENTION_WEEKS", 4))

# -------- BOOKING RULES --------
# Approving does not re-check overlaps unless this is switched on
RECHECK_CONFLICT_ON_APPROVE = _flag("RECHECK_CONFLICT_ON_APPROVE")

# -------- HTTP --------
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

APP_VERSION = "1.0.0"

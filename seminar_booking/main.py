import time

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from seminar_booking.api.routes import admin, auth, bookings, halls, health, metrics
from seminar_booking.core.config import APP_VERSION, CORS_ORIGINS
from seminar_booking.core.errors import BookingError
from seminar_booking.core.logging_config import get_logger
from seminar_booking.core.metrics import http_requests_in_progress, record_http_request

logger = get_logger()
http_log = get_logger("http")

app = FastAPI(
    title="Seminar Hall Booking API",
    version=APP_VERSION,
    description="Halls, bookings and approvals for admins and faculty"
)


# ⭐ Request Logging + Metrics Middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    path = request.url.path
    http_log.info(f"REQUEST: {request.method} {request.url}")

    if path == "/metrics":
        return await call_next(request)

    started = time.perf_counter()
    http_requests_in_progress.inc()
    try:
        response = await call_next(request)
        http_log.info(f"RESPONSE: {response.status_code} {request.url}")
        record_http_request(request.method, path, response.status_code, time.perf_counter() - started)
        return response

    except Exception as e:
        logger.error(f"ERROR: {request.url} -> {str(e)}")
        record_http_request(request.method, path, 500, time.perf_counter() - started)
        raise e

    finally:
        http_requests_in_progress.dec()


# ⭐ Error kinds -> HTTP status
@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    if exc.status_code >= 500:
        logger.error(f"{exc.kind.upper()}: {request.method} {request.url} -> {exc.message}")
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        {
            "error": "Validation failed",
            "kind": "validation",
            "details": jsonable_encoder(exc.errors()),
        },
        status_code=400,
    )


# ⭐ CORS (frontend runs on a different origin)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -------- ROUTERS --------
app.include_router(auth.router)
app.include_router(halls.router)
app.include_router(bookings.router)
app.include_router(admin.router)
app.include_router(health.router)
app.include_router(metrics.router)


@app.get("/", tags=["Root"])
def root():
    return {"message": "Backend running successfully"}

from fastapi import APIRouter, Response

from seminar_booking.core.metrics import render

router = APIRouter(tags=["Metrics"])


# Public, as Prometheus scrapers expect
@router.get("/metrics")
def metrics():
    payload, content_type = render()
    return Response(content=payload, media_type=content_type)

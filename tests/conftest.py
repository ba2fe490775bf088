"""Shared fixtures: in-memory SQLite, app client, users and halls."""

from __future__ import annotations

import os
import tempfile

# Settings are read at import time, so they must be in place first
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="seminar-booking-logs-"))
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.pop("REDIS_URL", None)

from datetime import date, timedelta  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from seminar_booking.core.dependencies import get_db  # noqa: E402
from seminar_booking.db.session import Base  # noqa: E402
from seminar_booking.main import app  # noqa: E402
from seminar_booking.models import Booking, Hall, User  # noqa: E402
from seminar_booking.repos.bookings import BookingRepository  # noqa: E402
from seminar_booking.repos.halls import HallRepository  # noqa: E402
from seminar_booking.services.lifecycle import (  # noqa: E402
    BookingLifecycleManager,
    Requester,
    SlotLocks,
)

FUTURE = date.today() + timedelta(days=7)


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Direct-to-database helpers for service tests
# ---------------------------------------------------------------------------


def _add_user(db, name: str, email: str, role: str) -> User:
    user = User(name=name, email=email, password_hash="x", role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture()
def admin_user(db):
    return _add_user(db, "Admin One", "admin@example.com", "admin")


@pytest.fixture()
def faculty_user(db):
    return _add_user(db, "Dr. Rao", "rao@example.com", "faculty")


@pytest.fixture()
def other_faculty_user(db):
    return _add_user(db, "Dr. Iyer", "iyer@example.com", "faculty")


@pytest.fixture()
def admin(admin_user):
    return Requester(user_id=admin_user.id, role="admin", name=admin_user.name)


@pytest.fixture()
def faculty(faculty_user):
    return Requester(user_id=faculty_user.id, role="faculty", name=faculty_user.name)


@pytest.fixture()
def other_faculty(other_faculty_user):
    return Requester(user_id=other_faculty_user.id, role="faculty", name=other_faculty_user.name)


@pytest.fixture()
def hall(db):
    hall = Hall(name="Main Seminar Hall", capacity=120, equipment=["Projector", "Mic"])
    db.add(hall)
    db.commit()
    db.refresh(hall)
    return hall


@pytest.fixture()
def second_hall(db):
    hall = Hall(name="Board Room", capacity=20, equipment=["Whiteboard"])
    db.add(hall)
    db.commit()
    db.refresh(hall)
    return hall


@pytest.fixture()
def manager(db):
    return BookingLifecycleManager(
        BookingRepository(db), HallRepository(db), locks=SlotLocks()
    )


@pytest.fixture()
def add_booking(db, faculty_user, hall):
    """Insert a booking row directly, bypassing the lifecycle rules."""

    def _add(start: str, end: str, status: str = "Pending", day: date = FUTURE, **overrides):
        booking = Booking(
            hall_id=overrides.pop("hall_id", hall.id),
            hall_name=hall.name,
            faculty_id=overrides.pop("faculty_id", faculty_user.id),
            faculty_name=faculty_user.name,
            date=day,
            start_time=start,
            end_time=end,
            purpose="Department seminar",
            status=status,
            **overrides,
        )
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    return _add


# ---------------------------------------------------------------------------
# API helpers
# ---------------------------------------------------------------------------


def register(client, name: str, email: str, role: str, password: str = "secret123") -> dict:
    resp = client.post(
        "/auth/register",
        json={"name": name, "email": email, "password": password, "role": role},
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    return {"user": body["user"], "headers": {"Authorization": f"Bearer {body['token']}"}}


@pytest.fixture()
def admin_api(client):
    return register(client, "Admin One", "admin@example.com", "admin")


@pytest.fixture()
def faculty_api(client):
    return register(client, "Dr. Rao", "rao@example.com", "faculty")


@pytest.fixture()
def other_faculty_api(client):
    return register(client, "Dr. Iyer", "iyer@example.com", "faculty")


@pytest.fixture()
def hall_api(client, admin_api):
    resp = client.post(
        "/halls/",
        json={"name": "Main Seminar Hall", "capacity": 120, "equipment": ["Projector", "Mic"]},
        headers=admin_api["headers"],
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["hall"]

from __future__ import annotations

from sqlalchemy.orm import Session

from seminar_booking.models.user import User
from seminar_booking.repos.bookings import storage_errors


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, user_id: int) -> User | None:
        with storage_errors(self.db, "loading user"):
            return self.db.get(User, user_id)

    def find_by_email(self, email: str) -> User | None:
        with storage_errors(self.db, "loading user"):
            return self.db.query(User).filter(User.email == email.lower()).first()

    def list_all(self) -> list[User]:
        with storage_errors(self.db, "listing users"):
            return self.db.query(User).order_by(User.name).all()

    def count(self) -> int:
        with storage_errors(self.db, "counting users"):
            return self.db.query(User).count()

    def insert(self, user: User) -> User:
        with storage_errors(self.db, "saving user"):
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            return user

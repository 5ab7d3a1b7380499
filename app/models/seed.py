from __future__ import annotations

import os

from sqlalchemy.orm import Session

from app.core.db import SessionLocal, create_tables
from app.core.security import generate_salt, hash_password
from app.controllers.auth_controller import avatar_url
from app.models.enums import UserRole
from app.models.user_model import User


SEED_ADMINS = [
    {
        "email": "admin@forum.example.com",
        "username": "admin",
    },
]


def seed_admins(db: Session, password: str) -> list[User]:
    created: list[User] = []

    for item in SEED_ADMINS:
        existing = db.query(User).filter(
            (User.email == item["email"]) | (User.username == item["username"])
        ).first()
        if existing:
            continue

        salt = generate_salt()
        user = User(
            email=item["email"],
            username=item["username"],
            salt=salt,
            password_hash=hash_password(password, salt),
            role=UserRole.ADMIN,
            activated=True,
            blocked=False,
            verified=True,
            avatar=avatar_url(item["email"]),
        )
        db.add(user)
        created.append(user)

    db.commit()
    return created


def run_seed() -> None:
    if SessionLocal is None:
        raise RuntimeError("DATABASE_URL is not set")
    password = os.getenv("SEED_ADMIN_PASSWORD")
    if not password:
        raise RuntimeError("SEED_ADMIN_PASSWORD is not set")
    create_tables()
    db = SessionLocal()
    try:
        seed_admins(db, password)
    finally:
        db.close()


if __name__ == "__main__":
    run_seed()

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("JWT_ALGORITHM", "HS256")
os.environ.setdefault("JWT_EXPIRES_MINUTES", "60")
os.environ.setdefault("LOG_JSON", "false")

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core import errors
from app.core.auth import get_clock
from app.core.context import RequestContext
from app.core.db import get_db
from app.core.mailer import Mailer, get_mailer
from app.core.security import generate_salt, hash_password
from app.main import app
from app.models.base import Base
from app.models.enums import UserRole
from app.models.user_model import User
from app.models import reset_pass_model  # noqa: F401

T0 = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class RecordingMailer(Mailer):
    def __init__(self):
        self.activation_mails = []
        self.reset_pass_mails = []
        self.fail = False

    def send_activation_mail(self, user):
        if self.fail:
            raise errors.transport_failed()
        self.activation_mails.append(user.email)

    def send_reset_pass_mail(self, reset_pass):
        if self.fail:
            raise errors.transport_failed()
        self.reset_pass_mails.append(reset_pass.reset_pass_id)


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


def seed_user(
    db,
    email="alice@example.com",
    username="alice",
    password="correct-password",
    salt=None,
    activated=True,
    blocked=False,
    verified=False,
    role=UserRole.MEMBER,
):
    salt = salt or generate_salt()
    user = User(
        email=email,
        username=username,
        salt=salt,
        password_hash=hash_password(password, salt),
        activated=activated,
        blocked=blocked,
        verified=verified,
        role=role,
        created_at=T0,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture()
def db_session():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def mailer():
    return RecordingMailer()


@pytest.fixture()
def clock():
    return FakeClock(T0)


@pytest.fixture()
def ctx():
    return RequestContext(now=T0)


@pytest.fixture()
def client(db_session, mailer, clock):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_clock] = lambda: clock
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

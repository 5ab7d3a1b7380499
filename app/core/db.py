from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from app.core.config import get_settings

settings = get_settings()

if not settings.database_url:
    # The app can still start, but any DB access will fail until DATABASE_URL is set.
    _engine = None
    SessionLocal = None
else:
    _engine = create_engine(settings.database_url, pool_pre_ping=True)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)


def create_tables():
    from app.models.base import Base
    from app.models import reset_pass_model, user_model  # noqa: F401

    if _engine is None:
        raise RuntimeError("DATABASE_URL is not set")
    Base.metadata.create_all(bind=_engine)


def get_db():
    if SessionLocal is None:
        raise RuntimeError("DATABASE_URL is not set")
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

from datetime import datetime
from sqlalchemy.orm import Session
from sqlalchemy import select, update
from app.models.reset_pass_model import ResetPass


def create_reset_pass(db: Session, email: str, created_at: datetime) -> ResetPass:
    reset_pass = ResetPass(email=email, available=True, created_at=created_at)
    db.add(reset_pass)
    db.commit()
    db.refresh(reset_pass)
    return reset_pass


def get_reset_pass_by_id(db: Session, reset_pass_id: int) -> ResetPass | None:
    stmt = select(ResetPass).where(ResetPass.reset_pass_id == reset_pass_id)
    return db.execute(stmt).scalars().first()


def get_latest_reset_pass_by_email(db: Session, email: str) -> ResetPass | None:
    stmt = (
        select(ResetPass)
        .where(ResetPass.email == email)
        .order_by(ResetPass.created_at.desc(), ResetPass.reset_pass_id.desc())
    )
    return db.execute(stmt).scalars().first()


def update_reset_pass_availability(db: Session, reset_pass_id: int, available: bool = False) -> int:
    """Unconditionally mark a record unavailable. A consumed record is never reopened."""
    if available:
        raise ValueError("reset requests cannot be made available again")
    stmt = update(ResetPass).where(ResetPass.reset_pass_id == reset_pass_id).values(available=available)
    changed = db.execute(stmt).rowcount
    db.commit()
    return changed


def consume_reset_pass(db: Session, reset_pass_id: int) -> bool:
    """Flip available to false only if it is still true. Does not commit."""
    stmt = (
        update(ResetPass)
        .where(ResetPass.reset_pass_id == reset_pass_id)
        .where(ResetPass.available.is_(True))
        .values(available=False)
    )
    return db.execute(stmt).rowcount == 1

from sqlalchemy.orm import Session
from sqlalchemy import select, update, func, not_
from app.models.user_model import User


def get_user_by_email(db: Session, email: str) -> User | None:
    stmt = select(User).where(func.lower(User.email) == email.lower())
    return db.execute(stmt).scalars().first()


def get_user_by_username(db: Session, username: str) -> User | None:
    stmt = select(User).where(User.username == username)
    return db.execute(stmt).scalars().first()


def get_user_by_id(db: Session, user_id: int) -> User | None:
    stmt = select(User).where(User.user_id == user_id)
    return db.execute(stmt).scalars().first()


def get_users(db: Session, skip: int = 0, limit: int = 20) -> list[User]:
    stmt = select(User).order_by(User.created_at.desc(), User.user_id.desc()).offset(skip).limit(limit)
    return list(db.execute(stmt).scalars().all())


def count_users(db: Session, **conditions) -> int:
    stmt = select(func.count()).select_from(User)
    for name, value in conditions.items():
        stmt = stmt.where(getattr(User, name) == value)
    return db.execute(stmt).scalar_one()


def save_user(db: Session, user: User) -> User:
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_user(db: Session, user: User, updates: dict) -> User:
    for k, v in updates.items():
        setattr(user, k, v)
    return save_user(db, user)


def set_user_password_hash(db: Session, user_id: int, password_hash: str) -> int:
    """Stage a password overwrite in the current transaction; the caller commits."""
    stmt = update(User).where(User.user_id == user_id).values(password_hash=password_hash)
    return db.execute(stmt).rowcount


def mark_user_activated(db: Session, user_id: int) -> bool:
    """Set activated only if it is still unset. Returns False when another request got there first."""
    stmt = (
        update(User)
        .where(User.user_id == user_id)
        .where(User.activated.is_(False))
        .values(activated=True)
    )
    changed = db.execute(stmt).rowcount
    db.commit()
    return changed == 1


def flip_user_flag(db: Session, user: User, flag: str) -> User:
    column = getattr(User, flag)
    stmt = update(User).where(User.user_id == user.user_id).values({column: not_(column)})
    db.execute(stmt)
    db.commit()
    db.refresh(user)
    return user

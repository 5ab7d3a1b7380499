import logging
from sqlalchemy.orm import Session
from app.core.account_state import toggle_blocked, toggle_verified
from app.core.context import RequestContext
from app.repositories.user_repo import count_users as count_user_rows, get_user_by_id, get_users
from app.schemas.user_schema import UserListResponse, UserRead

logger = logging.getLogger(__name__)


def list_users(db: Session, ctx: RequestContext, page_index: int = 1, page_size: int = 20) -> UserListResponse:
    skip = (page_index - 1) * page_size
    users = get_users(db, skip=skip, limit=page_size)
    return UserListResponse(
        total_count=count_user_rows(db),
        page_index=page_index,
        page_size=page_size,
        users=[UserRead.model_validate(u) for u in users],
    )


def count_users(db: Session, ctx: RequestContext, **conditions) -> int:
    return count_user_rows(db, **conditions)


def toggle_user_blocked(db: Session, ctx: RequestContext, user_id: int):
    user = toggle_blocked(db, get_user_by_id(db, user_id))
    logger.info("admin %s toggled blocked on user %s", ctx.current_user_id, user_id)
    return user


def toggle_user_verified(db: Session, ctx: RequestContext, user_id: int):
    user = toggle_verified(db, get_user_by_id(db, user_id))
    logger.info("admin %s toggled verified on user %s", ctx.current_user_id, user_id)
    return user

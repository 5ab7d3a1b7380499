from sqlalchemy.orm import Session
from app.core import errors
from app.core.context import RequestContext
from app.core.account_state import require_user
from app.core.pipeline import run_steps
from app.repositories.user_repo import get_user_by_email, get_user_by_id, get_user_by_username, update_user
from app.schemas.user_schema import UserEdit


def get_user(
    db: Session,
    ctx: RequestContext,
    user_id: int | None = None,
    username: str | None = None,
    email: str | None = None,
):
    if user_id is not None:
        user = get_user_by_id(db, user_id)
    elif username:
        user = get_user_by_username(db, username)
    elif email:
        user = get_user_by_email(db, email)
    else:
        user = None
    if not user:
        raise errors.user_not_found("id")
    return user


def edit_profile(db: Session, ctx: RequestContext, data: UserEdit):
    def apply_edit(user):
        return update_user(db, user, data.model_dump(exclude_unset=True))

    return run_steps(ctx.current_user, require_user("id"), apply_edit)

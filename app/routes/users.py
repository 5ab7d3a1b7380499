from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.core.db import get_db
from app.core.auth import get_request_context, get_user_context
from app.core.context import RequestContext
from app.controllers.user_controller import edit_profile, get_user
from app.schemas.user_schema import ERROR_RESPONSES, UserEdit, UserPublic, UserRead

router = APIRouter(prefix="/users", tags=["users"], responses=ERROR_RESPONSES)


@router.patch("/me", response_model=UserRead)
def edit_me_route(
    payload: UserEdit,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_user_context),
):
    return edit_profile(db, ctx, payload)


@router.get("/by-name/{username}", response_model=UserPublic)
def get_user_by_name_route(
    username: str,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    return get_user(db, ctx, username=username)


@router.get("/{user_id}", response_model=UserPublic)
def get_user_route(
    user_id: int,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    return get_user(db, ctx, user_id=user_id)

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.db import get_db
from app.core.auth import get_admin_context
from app.core.context import RequestContext
from app.controllers.admin_controller import count_users, list_users, toggle_user_blocked, toggle_user_verified
from app.schemas.user_schema import ERROR_RESPONSES, UserCountResponse, UserListResponse, UserRead

router = APIRouter(prefix="/admin", tags=["admin"], responses=ERROR_RESPONSES)


@router.get("/users", response_model=UserListResponse)
def list_users_route(
    page_index: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_admin_context),
):
    return list_users(db, ctx, page_index=page_index, page_size=page_size)


@router.get("/users/count", response_model=UserCountResponse)
def count_users_route(
    activated: bool | None = None,
    blocked: bool | None = None,
    verified: bool | None = None,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_admin_context),
):
    conditions = {
        k: v for k, v in {"activated": activated, "blocked": blocked, "verified": verified}.items()
        if v is not None
    }
    return UserCountResponse(count=count_users(db, ctx, **conditions))


@router.post("/users/{user_id}/toggle-blocked", response_model=UserRead)
def toggle_blocked_route(
    user_id: int,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_admin_context),
):
    return toggle_user_blocked(db, ctx, user_id)


@router.post("/users/{user_id}/toggle-verified", response_model=UserRead)
def toggle_verified_route(
    user_id: int,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_admin_context),
):
    return toggle_user_verified(db, ctx, user_id)

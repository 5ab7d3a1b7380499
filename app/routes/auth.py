from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.core.db import get_db
from app.core.auth import get_request_context, get_user_context
from app.core.context import RequestContext
from app.core.mailer import Mailer, get_mailer
from app.controllers.auth_controller import (
    activate,
    change_password,
    forgot_password,
    get_reset_pass_record,
    login,
    register,
    resend_activation_mail,
    resend_reset_pass_mail,
    reset_password_with_token,
)
from app.schemas.user_schema import (
    ActivateRequest,
    ForgotPasswordRequest,
    PasswordChange,
    ResendActivationRequest,
    ResetPassLookup,
    ResetPassRead,
    ResetPasswordRequest,
    StatusResponse,
    TokenResponse,
    UserLogin,
    UserRead,
    UserRegister,
    ERROR_RESPONSES,
)

router = APIRouter(prefix="/auth", tags=["auth"], responses=ERROR_RESPONSES)


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_route(
    payload: UserRegister,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
    mailer: Mailer = Depends(get_mailer),
):
    return register(db, ctx, mailer, payload)


@router.post("/activate", response_model=UserRead)
def activate_route(
    payload: ActivateRequest,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    return activate(db, ctx, payload.email, payload.token)


@router.post("/activate/resend", response_model=StatusResponse)
def resend_activation_route(
    payload: ResendActivationRequest,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
    mailer: Mailer = Depends(get_mailer),
):
    resend_activation_mail(db, ctx, mailer, payload.email)
    return StatusResponse()


@router.post("/login", response_model=TokenResponse)
def login_route(
    payload: UserLogin,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    return login(db, ctx, payload)


@router.get("/me", response_model=UserRead)
def me_route(ctx: RequestContext = Depends(get_user_context)):
    return ctx.current_user


@router.post("/change-password", response_model=StatusResponse)
def change_password_route(
    payload: PasswordChange,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_user_context),
):
    change_password(db, ctx, payload.old_password, payload.new_password)
    return StatusResponse()


@router.post("/forgot-password", response_model=StatusResponse)
def forgot_password_route(
    payload: ForgotPasswordRequest,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
    mailer: Mailer = Depends(get_mailer),
):
    forgot_password(db, ctx, mailer, payload.email)
    return StatusResponse()


@router.post("/forgot-password/resend", response_model=StatusResponse)
def resend_reset_pass_route(
    payload: ForgotPasswordRequest,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
    mailer: Mailer = Depends(get_mailer),
):
    resend_reset_pass_mail(db, ctx, mailer, payload.email)
    return StatusResponse()


@router.post("/reset-password/check", response_model=ResetPassRead)
def reset_pass_check_route(
    payload: ResetPassLookup,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    return get_reset_pass_record(db, ctx, payload.email, payload.token)


@router.post("/reset-password", response_model=StatusResponse)
def reset_password_route(
    payload: ResetPasswordRequest,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    reset_password_with_token(db, ctx, payload)
    return StatusResponse()

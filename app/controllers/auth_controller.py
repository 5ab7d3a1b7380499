"""
Account flows: register, activate, login, change password, forgot/reset password.

Each flow is an ordered list of steps run through ``run_steps``. The first
failing step raises an ``AccountError`` that propagates unchanged; steps that
already ran are not undone. Entities are always persisted before mail goes
out, so a transport failure leaves a usable record behind.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core import errors
from app.core.account_state import (
    activate as activate_user,
    require_activated,
    require_not_activated,
    require_not_blocked,
    require_password,
    require_user,
)
from app.core.config import get_settings
from app.core.context import RequestContext
from app.core.mailer import Mailer
from app.core.pipeline import run_steps
from app.core.reset_ledger import require_available, require_not_expired, require_reset_token
from app.core.security import create_access_token, generate_salt, hash_password, verify_password
from app.core.tokens import md5_hex
from app.models.reset_pass_model import ResetPass
from app.models.user_model import User
from app.repositories.reset_pass_repo import (
    consume_reset_pass,
    create_reset_pass,
    get_latest_reset_pass_by_email,
    get_reset_pass_by_id,
)
from app.repositories.user_repo import (
    get_user_by_email,
    get_user_by_id,
    get_user_by_username,
    save_user,
    set_user_password_hash,
)
from app.schemas.user_schema import ResetPasswordRequest, TokenResponse, UserLogin, UserRegister

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def avatar_url(email: str) -> str:
    settings = get_settings()
    return f"{settings.avatar_base_url}/{md5_hex(email)}?s={settings.avatar_size}"


def require_matching_passwords(password: str, repassword: str):
    def require_matching_passwords_step(value):
        if password != repassword:
            raise errors.password_mismatch()
        return value
    return require_matching_passwords_step


def register(db: Session, ctx: RequestContext, mailer: Mailer, data: UserRegister) -> User:
    email = normalize_email(data.email)

    def require_email_free(value):
        if get_user_by_email(db, email) is not None:
            raise errors.email_taken()
        return value

    def require_username_free(value):
        if get_user_by_username(db, data.username) is not None:
            raise errors.username_taken()
        return value

    def create_user(_):
        salt = generate_salt()
        user = User(
            email=email,
            username=data.username,
            salt=salt,
            password_hash=hash_password(data.password, salt),
            activated=False,
            blocked=False,
            verified=False,
            avatar=avatar_url(email),
            created_at=ctx.now,
        )
        try:
            user = save_user(db, user)
        except IntegrityError:
            # A concurrent registration claimed the email or username.
            db.rollback()
            require_email_free(None)
            raise errors.username_taken()
        logger.info("registered user %s", user.user_id)
        return user

    def send_activation(user: User) -> User:
        mailer.send_activation_mail(user)
        return user

    return run_steps(
        data,
        require_matching_passwords(data.password, data.repassword),
        require_email_free,
        require_username_free,
        create_user,
        send_activation,
    )


def activate(db: Session, ctx: RequestContext, email: str, token: str) -> User:
    user = get_user_by_email(db, normalize_email(email))
    return activate_user(db, user, token)


def resend_activation_mail(db: Session, ctx: RequestContext, mailer: Mailer, email: str) -> User:
    def send_activation(user: User) -> User:
        mailer.send_activation_mail(user)
        logger.info("activation mail resent to user %s", user.user_id)
        return user

    return run_steps(
        get_user_by_email(db, normalize_email(email)),
        require_user("email"),
        require_not_activated,
        send_activation,
    )


def check(db: Session, ctx: RequestContext, email: str, password: str) -> User:
    """Return the user if they may log in, else the first failing reason in fixed order."""
    return run_steps(
        get_user_by_email(db, normalize_email(email)),
        require_user("username"),
        require_password(password),
        require_activated,
        require_not_blocked,
    )


def login(db: Session, ctx: RequestContext, data: UserLogin) -> TokenResponse:
    user = check(db, ctx, data.email, data.password)
    logger.info("user %s logged in", user.user_id)
    return TokenResponse(access_token=create_access_token(subject=str(user.user_id)))


def change_password(
    db: Session,
    ctx: RequestContext,
    old_password: str,
    new_password: str,
    user_id: int | None = None,
) -> User:
    user_id = ctx.current_user_id or user_id

    def require_old_password(user: User) -> User:
        if not verify_password(old_password, user.salt, user.password_hash):
            raise errors.wrong_password()
        return user

    def store_new_password(user: User) -> User:
        # The salt stays as it is so pending activation links keep working.
        user.password_hash = hash_password(new_password, user.salt)
        user = save_user(db, user)
        logger.info("user %s changed password", user.user_id)
        return user

    return run_steps(
        get_user_by_id(db, user_id) if user_id is not None else None,
        require_user("id"),
        require_old_password,
        store_new_password,
    )


def forgot_password(db: Session, ctx: RequestContext, mailer: Mailer, email: str) -> ResetPass:
    """
    Record a reset request and mail the link.

    Deliberately does not check that ``email`` belongs to a registered user.
    """

    def record_request(email: str) -> ResetPass:
        reset_pass = create_reset_pass(db, email, ctx.now)
        logger.info("reset request %s recorded", reset_pass.reset_pass_id)
        return reset_pass

    def send_reset_mail(reset_pass: ResetPass) -> ResetPass:
        mailer.send_reset_pass_mail(reset_pass)
        return reset_pass

    return run_steps(normalize_email(email), record_request, send_reset_mail)


def get_reset_pass_record(db: Session, ctx: RequestContext, email: str, token: str) -> ResetPass:
    return run_steps(
        get_latest_reset_pass_by_email(db, normalize_email(email)),
        require_reset_token(token),
        require_available,
        require_not_expired(ctx.now),
    )


def resend_reset_pass_mail(db: Session, ctx: RequestContext, mailer: Mailer, email: str) -> ResetPass:
    def require_record(reset_pass: ResetPass | None) -> ResetPass:
        if reset_pass is None:
            raise errors.reset_record_not_found()
        return reset_pass

    def send_reset_mail(reset_pass: ResetPass) -> ResetPass:
        mailer.send_reset_pass_mail(reset_pass)
        logger.info("reset mail for request %s resent", reset_pass.reset_pass_id)
        return reset_pass

    return run_steps(
        get_latest_reset_pass_by_email(db, normalize_email(email)),
        require_record,
        require_available,
        require_not_expired(ctx.now),
        send_reset_mail,
    )


def reset_password(
    db: Session,
    ctx: RequestContext,
    user_id: int,
    new_password: str,
    reset_pass_id: int,
) -> User:
    """
    Overwrite the user's password and consume the reset request.

    Both writes go out in one transaction, and the request is only consumed if
    it is still available, so two concurrent resets cannot both succeed.
    """

    def require_reset_pass(user: User) -> User:
        if get_reset_pass_by_id(db, reset_pass_id) is None:
            raise errors.reset_record_not_found()
        return user

    def write_password_and_consume(user: User) -> User:
        if not consume_reset_pass(db, reset_pass_id):
            db.rollback()
            raise errors.reset_already_used()
        set_user_password_hash(db, user.user_id, hash_password(new_password, user.salt))
        db.commit()
        db.refresh(user)
        logger.info("user %s reset password with request %s", user.user_id, reset_pass_id)
        return user

    return run_steps(
        get_user_by_id(db, user_id),
        require_user("id"),
        require_reset_pass,
        write_password_and_consume,
    )


def reset_password_with_token(db: Session, ctx: RequestContext, data: ResetPasswordRequest) -> User:
    def lookup_record(_) -> ResetPass:
        return get_reset_pass_record(db, ctx, data.email, data.token)

    def find_owner(reset_pass: ResetPass) -> tuple[User, ResetPass]:
        user = require_user("username")(get_user_by_email(db, reset_pass.email))
        return user, reset_pass

    def apply_reset(pair: tuple[User, ResetPass]) -> User:
        user, reset_pass = pair
        return reset_password(db, ctx, user.user_id, data.new_password, reset_pass.reset_pass_id)

    return run_steps(
        data,
        require_matching_passwords(data.new_password, data.repassword),
        lookup_record,
        find_owner,
        apply_reset,
    )

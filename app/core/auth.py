from typing import Callable
from datetime import datetime
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from jose import JWTError
from app.core.context import RequestContext, utcnow
from app.core.db import get_db
from app.core.security import decode_access_token
from app.repositories.user_repo import get_user_by_id
from app.models.enums import UserRole

security = HTTPBearer(auto_error=False)


def get_clock() -> Callable[[], datetime]:
    return utcnow


def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
):
    if credentials is None:
        return None
    try:
        payload = decode_access_token(credentials.credentials)
        subject = payload.get("sub")
        if subject is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
        user_id = int(subject)
    except (JWTError, ValueError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    user = get_user_by_id(db, user_id)
    if not user or not user.activated or user.blocked:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Inactive account")
    return user


def get_current_user(user=Depends(get_optional_user)):
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return user


def require_admin(user=Depends(get_current_user)):
    if user.role != UserRole.ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user


def get_request_context(
    user=Depends(get_optional_user),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> RequestContext:
    return RequestContext(current_user=user, now=clock())


def get_user_context(
    user=Depends(get_current_user),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> RequestContext:
    return RequestContext(current_user=user, now=clock())


def get_admin_context(
    user=Depends(require_admin),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> RequestContext:
    return RequestContext(current_user=user, now=clock())

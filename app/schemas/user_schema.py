from datetime import datetime
from pydantic import BaseModel, EmailStr, ConfigDict, Field
from typing import Optional
from app.models.enums import UserRole


class UserRegister(BaseModel):
    email: EmailStr
    username: str = Field(min_length=2, max_length=32)
    password: str = Field(min_length=6)
    repassword: str


class UserRead(BaseModel):
    user_id: int
    email: EmailStr
    username: str
    avatar: Optional[str] = None
    website: Optional[str] = None
    github: Optional[str] = None
    signature: Optional[str] = None
    activated: bool
    blocked: bool
    verified: bool
    role: UserRole
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserPublic(BaseModel):
    user_id: int
    username: str
    avatar: Optional[str] = None
    website: Optional[str] = None
    github: Optional[str] = None
    signature: Optional[str] = None
    verified: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserEdit(BaseModel):
    website: Optional[str] = None
    github: Optional[str] = None
    signature: Optional[str] = Field(default=None, max_length=200)


class UserListResponse(BaseModel):
    total_count: int
    page_index: int
    page_size: int
    users: list[UserRead]


class UserCountResponse(BaseModel):
    count: int


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class ActivateRequest(BaseModel):
    email: EmailStr
    token: str


class ResendActivationRequest(BaseModel):
    email: EmailStr


class PasswordChange(BaseModel):
    old_password: str
    new_password: str = Field(min_length=6)


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPassLookup(BaseModel):
    email: EmailStr
    token: str


class ResetPassRead(BaseModel):
    reset_pass_id: int
    email: EmailStr
    available: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ResetPasswordRequest(BaseModel):
    email: EmailStr
    token: str
    new_password: str = Field(min_length=6)
    repassword: str


class StatusResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    kind: str
    message: str
    field: str
    severity: str


ERROR_RESPONSES = {
    code: {"model": ErrorResponse}
    for code in (400, 401, 403, 404, 409, 410, 502)
}

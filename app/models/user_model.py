from sqlalchemy import Column, BigInteger, Integer, Text, TIMESTAMP, Boolean, Enum as SAEnum
from sqlalchemy.sql import func
from app.models.base import Base
from app.models.enums import UserRole


class User(Base):
    __tablename__ = "user_tbl"

    user_id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)
    email = Column(Text, nullable=False, unique=True, index=True)
    username = Column(Text, nullable=False, unique=True, index=True)
    password_hash = Column(Text, nullable=False)
    # Fixed at registration; activation tokens are derived from it.
    salt = Column(Text, nullable=False)
    activated = Column(Boolean, nullable=False, default=False, server_default="false")
    blocked = Column(Boolean, nullable=False, default=False, server_default="false")
    verified = Column(Boolean, nullable=False, default=False, server_default="false")
    role = Column(SAEnum(UserRole, name="user_role_enum"), nullable=False, default=UserRole.MEMBER)
    avatar = Column(Text)
    website = Column(Text)
    github = Column(Text)
    signature = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

from sqlalchemy import Column, BigInteger, Text, TIMESTAMP, Boolean, Integer
from sqlalchemy.sql import func
from app.models.base import Base


class ResetPass(Base):
    __tablename__ = "reset_pass_tbl"

    # No foreign key to user_tbl: a request may name an address nobody registered.
    reset_pass_id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)
    email = Column(Text, nullable=False, index=True)
    available = Column(Boolean, nullable=False, default=True, server_default="true")
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

import enum


class UserRole(enum.Enum):
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"

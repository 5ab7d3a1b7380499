from pydantic import BaseModel
import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseModel):
    database_url: str
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 60
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_pass: str | None = None
    smtp_from: str | None = None
    smtp_starttls: bool = True
    smtp_timeout: float = 10.0
    frontend_base_url: str = "http://localhost:8080"
    site_name: str = "Forum"
    reset_pass_expire_hours: int = 24
    avatar_base_url: str = "https://www.gravatar.com/avatar"
    avatar_size: int = 48
    log_level: str = "INFO"
    log_json: bool = True


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        database_url = os.getenv("DATABASE_URL", "")
        jwt_secret_key = os.getenv("JWT_SECRET_KEY", "")
        if not jwt_secret_key:
            raise RuntimeError("JWT_SECRET_KEY is not set")
        _settings = Settings(
            database_url=database_url,
            jwt_secret_key=jwt_secret_key,
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            jwt_expires_minutes=int(os.getenv("JWT_EXPIRES_MINUTES", "60")),
            smtp_host=os.getenv("SMTP_HOST"),
            smtp_port=int(os.getenv("SMTP_PORT", "587")),
            smtp_user=os.getenv("SMTP_USER"),
            smtp_pass=os.getenv("SMTP_PASS"),
            smtp_from=os.getenv("SMTP_FROM"),
            smtp_starttls=os.getenv("SMTP_STARTTLS", "true").lower() in ("1", "true", "yes"),
            smtp_timeout=float(os.getenv("SMTP_TIMEOUT", "10")),
            frontend_base_url=os.getenv("FRONTEND_BASE_URL", "http://localhost:8080"),
            site_name=os.getenv("SITE_NAME", "Forum"),
            reset_pass_expire_hours=int(os.getenv("RESET_PASS_EXPIRE_HOURS", "24")),
            avatar_base_url=os.getenv("AVATAR_BASE_URL", "https://www.gravatar.com/avatar"),
            avatar_size=int(os.getenv("AVATAR_SIZE", "48")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_json=os.getenv("LOG_JSON", "true").lower() in ("1", "true", "yes"),
        )
    return _settings

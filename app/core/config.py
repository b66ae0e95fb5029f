import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()  # Carga las variables de entorno


class Settings(BaseModel):
    app_env: str = "development"
    database_url: Optional[str] = None
    sql_echo: bool = False

    secret_key: str = "dev-secret"
    algorithm: str = "HS256"

    google_client_id: str = ""
    google_client_secret: str = ""
    public_base_url: str = "http://localhost:5000"

    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = None
    mail_from: str = '"My College Finance" <budget@mycollegefinance.com>'

    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:5000"]
    log_level: str = "INFO"
    http_timeout_seconds: float = 10.0

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def google_redirect_uri(self) -> str:
        return f"{self.public_base_url.rstrip('/')}/api/google/oauth2callback"


def _split(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def settings_from_env() -> Settings:
    defaults = Settings()
    return Settings(
        app_env=os.getenv("APP_ENV", defaults.app_env),
        database_url=os.getenv("DATABASE_URL") or None,
        sql_echo=os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes"),
        secret_key=os.getenv("SECRET_KEY", defaults.secret_key),
        algorithm=os.getenv("ALGORITHM", defaults.algorithm),
        google_client_id=os.getenv("GOOGLE_CLIENT_ID", ""),
        google_client_secret=os.getenv("GOOGLE_CLIENT_SECRET", ""),
        public_base_url=os.getenv("PUBLIC_BASE_URL", defaults.public_base_url),
        smtp_host=os.getenv("SMTP_HOST") or None,
        smtp_port=int(os.getenv("SMTP_PORT", str(defaults.smtp_port))),
        smtp_user=os.getenv("SMTP_USER") or None,
        smtp_password=os.getenv("SMTP_PASSWORD") or None,
        mail_from=os.getenv("MAIL_FROM", defaults.mail_from),
        cors_origins=_split(os.getenv("CORS_ORIGINS")) or defaults.cors_origins,
        log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
        http_timeout_seconds=float(os.getenv("HTTP_TIMEOUT_SECONDS", str(defaults.http_timeout_seconds))),
    )


@lru_cache
def get_settings() -> Settings:
    return settings_from_env()

"""Runtime configuration.

Values come from the process environment; a local ``.env`` file is merged
in first via ``python-dotenv``.  Example ``.env``::

  DATABASE_URL=sqlite:///./data/globetrekker.db
  MAIL_PROVIDER=smtp            # or "api"
  EMAIL_USER=bot@gmail.com
  EMAIL_PASS=app-password
  ADMIN_EMAIL=ops@globetrekker.example
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_CORS_ORIGINS = (
    "https://globetrekker-travel-website.vercel.app",
    "http://localhost:5173",
    "http://localhost:3000",
)


def _default_sqlite_url() -> str:
    data_dir = Path(__file__).resolve().parents[2] / "data"
    data_dir.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{(data_dir / 'globetrekker.db').as_posix()}"


def _env(key: str, default: str = "") -> str:
    return (os.getenv(key) or default).strip()


def _env_bool(key: str, default: bool) -> bool:
    raw = _env(key)
    if not raw:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _env_int(key: str, default: int) -> int:
    raw = _env(key)
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def _split_origins(raw: str) -> list[str]:
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    # trailing slashes never match the Origin header
    return [x.strip().rstrip("/") for x in raw.split(",") if x.strip()]


@dataclass
class Settings:
    project_name: str = "GlobeTrekker API"
    log_level: str = "INFO"
    database_url: str = ""
    mail_provider: str = "smtp"
    email_user: str = ""
    email_pass: str = ""
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_use_tls: bool = True
    mail_api_key: str = ""
    mail_api_url: str = "https://api.resend.com/emails"
    mail_from: str = ""
    admin_email: str = ""
    mail_timeout_seconds: int = 10
    bcrypt_rounds: int = 10
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            project_name=_env("PROJECT_NAME", "GlobeTrekker API"),
            log_level=_env("LOG_LEVEL", "INFO"),
            database_url=_env("DATABASE_URL"),
            mail_provider=_env("MAIL_PROVIDER", "smtp").lower(),
            email_user=_env("EMAIL_USER"),
            email_pass=_env("EMAIL_PASS"),
            smtp_host=_env("SMTP_HOST", "smtp.gmail.com"),
            smtp_port=_env_int("SMTP_PORT", 587),
            smtp_use_tls=_env_bool("SMTP_USE_TLS", True),
            mail_api_key=_env("MAIL_API_KEY"),
            mail_api_url=_env("MAIL_API_URL", "https://api.resend.com/emails"),
            mail_from=_env("MAIL_FROM"),
            admin_email=_env("ADMIN_EMAIL"),
            mail_timeout_seconds=_env_int("MAIL_TIMEOUT_SECONDS", 10),
            bcrypt_rounds=_env_int("BCRYPT_ROUNDS", 10),
            cors_origins=_split_origins(_env("CORS_ORIGINS")),
        )

    @property
    def resolved_database_url(self) -> str:
        return self.database_url or _default_sqlite_url()

    @property
    def sender(self) -> str:
        """``From`` header used for every outgoing mail."""
        if self.mail_from:
            return self.mail_from
        if self.email_user:
            return f"GlobeTrekker <{self.email_user}>"
        return "GlobeTrekker <no-reply@globetrekker.local>"

    @property
    def operator_address(self) -> str:
        # contact messages fall back to the mailbox we send from
        return self.admin_email or self.email_user

    def missing_required(self) -> list[str]:
        missing = []
        if not self.database_url:
            missing.append("DATABASE_URL")
        if self.mail_provider == "api":
            if not self.mail_api_key:
                missing.append("MAIL_API_KEY")
        else:
            if not self.email_user:
                missing.append("EMAIL_USER")
            if not self.email_pass:
                missing.append("EMAIL_PASS")
        if not self.admin_email:
            missing.append("ADMIN_EMAIL")
        return missing


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()

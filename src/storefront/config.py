"""Application settings read from the process environment."""

import os

from pydantic import BaseModel, Field


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class MailSettings(BaseModel):
    backend: str = Field(default="memory", pattern="^(memory|smtp)$")
    host: str = "localhost"
    port: int = 587
    user: str | None = None
    password: str | None = None
    sender: str = "Storefront <no-reply@storefront.local>"
    use_tls: bool = True

    @classmethod
    def from_env(cls) -> "MailSettings":
        return cls(
            backend=os.getenv("MAIL_BACKEND", "memory"),
            host=os.getenv("SMTP_HOST", "localhost"),
            port=int(os.getenv("SMTP_PORT", "587")),
            user=os.getenv("SMTP_USER"),
            password=os.getenv("SMTP_PASSWORD"),
            sender=os.getenv("MAIL_FROM", "Storefront <no-reply@storefront.local>"),
            use_tls=_env_bool("SMTP_USE_TLS", True),
        )


class Settings(BaseModel):
    jwt_secret: str = "dev-secret-change-me"
    jwt_algorithm: str = "HS256"
    token_ttl_minutes: int = 60 * 24 * 7
    client_url: str = "http://localhost:3000"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    mail: MailSettings = Field(default_factory=MailSettings)

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("CORS_ORIGINS")
        return cls(
            jwt_secret=os.getenv("JWT_SECRET", "dev-secret-change-me"),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            token_ttl_minutes=int(os.getenv("TOKEN_TTL_MINUTES", str(60 * 24 * 7))),
            client_url=os.getenv("CLIENT_URL", "http://localhost:3000").rstrip("/"),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()] if origins else ["*"],
            mail=MailSettings.from_env(),
        )

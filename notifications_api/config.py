from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "Marketing Notifications API"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"
    app_url: str = "http://localhost:3040"

    # Database settings
    database_url: str = "sqlite+aiosqlite:///./notifications.db"

    # Security settings (tokens are issued by the identity provider)
    secret_key: str = "change-me"
    algorithm: str = "HS256"

    # CORS settings
    allowed_origins: list[str] = ["http://localhost:3040"]

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"  # "text" or "json"

    # SMTP settings for transactional email
    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_password: str | None = None
    smtp_from: str = "no-reply@localhost"

    # SendGrid marketing lists
    sendgrid_api_key: str = ""
    sendgrid_base_url: str = "https://api.sendgrid.com"
    sendgrid_marketing_list_id: str = ""
    sendgrid_unsubscribe_group_id: int | None = None
    sendgrid_timeout_seconds: float = 10.0

    # Minimum interval between two confirmation emails to the same address
    confirmation_cooldown_seconds: int = 60

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()

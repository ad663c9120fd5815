"""Application configuration settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Movie Ticket Booking Events"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Database
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_USER: str = "root"
    DB_PASSWORD: str = "password"
    DB_NAME: str = "quickshow"
    DATABASE_URL: str | None = None

    # Inngest
    INNGEST_APP_ID: str = "movie-ticket-booking"
    INNGEST_IS_PRODUCTION: bool = False
    INNGEST_SIGNING_KEY: str | None = None
    INNGEST_EVENT_KEY: str | None = None

    # Seat hold settings
    SEAT_HOLD_SECONDS: int = 600  # 10 minutes

    # Reminder settings
    REMINDER_CRON: str = "0 */8 * * *"
    REMINDER_LOOKAHEAD_HOURS: int = 8
    REMINDER_WINDOW_MINUTES: int = 10

    # Notifications
    DISPLAY_TIMEZONE: str = "Asia/Kolkata"
    USER_PAGE_SIZE: int = 500
    SITE_URL: str = "https://quickshow-rust.vercel.app/"

    # Email (AWS SES)
    EMAIL_DEVELOPMENT_MODE: bool = True
    SENDER_EMAIL: str = "no-reply@quickshow.example"
    SENDER_NAME: str = "QuickShow"
    AWS_REGION: str = "us-east-1"
    AWS_ACCESS_KEY_ID: str | None = None
    AWS_SECRET_ACCESS_KEY: str | None = None

    @property
    def database_url(self) -> str:
        """Get async database URL."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"mysql+aiomysql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

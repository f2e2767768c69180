import secrets

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_title: str = Field("Flashcards", description="Title shown on the study screen")
    environment: str = Field("development", description="Deployment environment name")
    secret_key: str = Field(secrets.token_urlsafe(32), description="Secret key for session management")
    session_ttl: int = Field(86400, gt=0, description="Seconds an idle deck session is kept in memory")
    session_maxsize: int = Field(1000, gt=0, description="Maximum number of concurrent deck sessions")
    page_size: int = Field(20, description="Cards rendered per page of the lazy card list")
    flip_transition_ms: int = Field(300, ge=0, description="Duration of the card flip animation")
    log_level: str = Field("INFO", description="Root logging level")
    log_json: bool = Field(True, description="Emit log records as JSON lines")
    host: str = Field("127.0.0.1", description="Bind address for the development server")
    port: int = Field(8000, description="Bind port for the development server")

    @field_validator('page_size')
    def validate_page_size(cls, v: int) -> int:
        """
        Keep pages small enough to render quickly and large enough to fill a screen.
        """
        if not 1 <= v <= 200:
            raise ValueError("page_size must be between 1 and 200")
        return v

    @field_validator('log_level')
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    class Config:
        # Automatically load the settings from environment variables
        env_prefix = "FLASHDECK_"
        env_file = ".env"
        env_file_encoding = "utf-8"


# Create a settings instance
settings = Settings()

# Export settings instance
__all__ = ['settings', 'Settings']

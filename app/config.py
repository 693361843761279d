from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

class Settings(BaseSettings):
    app_name: str = "LearnHub Landing API"

    # Database Settings
    database_url: Optional[str] = None
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_command_timeout: float = 60

    # App Settings
    frontend_url: str = "http://localhost:3000"
    environment: str = "development"
    log_level: str = "INFO"

    # Cookie Settings
    session_cookie_name: str = "session_id"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"  # Allows extra env vars without errors
    )

settings = Settings()

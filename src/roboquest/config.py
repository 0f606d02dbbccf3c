"""Application settings via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables with ROBOQUEST_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="ROBOQUEST_",
        env_file=".env",
        case_sensitive=False,
    )

    # --- Core ---
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    redis_url: str = "redis://localhost:6379/0"
    redis_max_connections: int = 50
    redis_socket_timeout_seconds: float = 5.0
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    rate_limit_requests: int = 100
    auth_rate_limit_requests: int = 20
    rate_limit_window_seconds: int = 60
    log_level: str = "INFO"
    log_format: str = "json"

    # --- JWT ---
    jwt_private_key_path: str = "keys/jwt_private.pem"
    jwt_public_key_path: str = "keys/jwt_public.pem"
    jwt_algorithm: str = "RS256"
    jwt_access_token_expire_minutes: int = 60
    jwt_issuer: str = "roboquest"

    # --- Identity ---
    admin_email: str = "admin@roboquest.dev"
    password_min_length: int = 6
    password_max_length: int = 128
    account_lockout_threshold: int = 10
    account_lockout_duration_minutes: int = 15

    # --- Gamification policy ---
    xp_per_level: int = 200
    default_tutorial_xp: int = 50
    default_daily_goal: int = 2
    login_history_days: int = 30
    leaderboard_size: int = 10

    # --- Store ---
    store_max_retries: int = 10
    seed_catalog_on_startup: bool = True


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()

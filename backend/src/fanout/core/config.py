"""Application configuration loaded from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings. All values can be overridden via environment variables."""

    # Application
    app_name: str = "Fanout"
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]

    # Auth (session provider)
    jwt_audience: str = "fanout-api"
    jwt_public_key: str = ""
    jwt_secret_key: str = "dev-secret"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60

    # SSE
    sse_heartbeat_interval_seconds: float = 10
    sse_max_pending_frames: int = 256
    sse_welcome_message: str = "Hi"

    # Publish webhook
    webhook_secret: str = ""

    model_config = {"env_prefix": "FANOUT_", "env_file": ".env", "extra": "ignore"}


settings = Settings()

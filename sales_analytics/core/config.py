from pydantic_settings import BaseSettings


class BaseLoggingConfig(BaseSettings):
    """Common logging configuration."""

    app_log_level: str = "INFO"
    app_log_redaction_patterns: list[str] = [
        "password",
        "token",
        "secret",
        "authorization",
        "cookie",
    ]
    app_environment: str = "production"


class Settings(BaseLoggingConfig):
    otel_service_name: str = "analytics"

    # HTTP
    host: str = "0.0.0.0"
    port: int = 3000
    allowed_origins: list[str] = ["http://localhost:5173"]

    # Cache
    cache_ttl_seconds: int = 300
    cache_check_period_seconds: int = 60
    cache_max_keys: int | None = 10_000

    # Mock data
    mock_data_size: int = 5000
    mock_data_months: int = 12
    mock_data_seed: int | None = None

    # Query limits
    max_range_days: int = 730  # 2 years
    max_lookback_years: int = 10


settings = Settings()

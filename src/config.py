from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Lantern"
    debug: bool = False
    log_level: str = "INFO"

    # Page fetch
    crawler_user_agent: str = (
        "Mozilla/5.0 (compatible; LanternBot/1.0; +https://lantern.example/bot)"
    )

    # PageSpeed Insights
    pagespeed_api_url: str = "https://www.googleapis.com/pagespeedonline/v5/runPagespeed"
    pagespeed_api_key: str | None = None

    # Gemini insights
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-1.5-flash"

    # Timeouts (seconds)
    http_timeout: int = 30
    pagespeed_timeout: int = 90
    insight_timeout: int = 45


settings = Settings()

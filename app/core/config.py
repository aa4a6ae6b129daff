from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    app_name: str = "TikTok Media Resolver"
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # Outbound HTTP
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    provider_timeout_seconds: float = 15.0
    normalizer_timeout_seconds: float = 10.0
    normalizer_max_redirects: int = 5
    file_proxy_timeout_seconds: float = 45.0

    # Keyed provider (registered only when a key is configured)
    rapidapi_key: Optional[str] = None
    rapidapi_host: str = "tiktok-scraper7.p.rapidapi.com"

    # CORS
    cors_allow_origins: List[str] = ["*"]


settings = Settings()

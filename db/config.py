from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Core Application Settings
    addon_name: str = "TheTVDB TV Provider"
    version: str = "1.0.0"
    description: str = "Custom TV metadata provider backed by TheTVDB v4 API"
    logging_level: str = "INFO"

    # Provider Identity
    provider_identifier: str = "tv.plex.agents.custom.example.thetvdb.tv"
    provider_title: str = "TheTVDB Example TV Provider"

    # TVDB Settings
    tvdb_api_key: str | None = None
    tvdb_api_url: str = "https://api4.thetvdb.com/v4"
    tvdb_language: str = "eng"  # ISO 639-2, sent as Accept-Language
    tvdb_token_ttl_hours: int = 24
    tvdb_request_timeout: int = 30

    # External Service URLs
    requests_proxy_url: str | None = None

    # Request Defaults
    default_language: str = "en-US"
    default_country: str = "US"
    default_container_size: int = Field(default=20, gt=0)

    # Matching Limits
    manual_match_limit: int = 5
    air_date_max_pages: int = 20

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()

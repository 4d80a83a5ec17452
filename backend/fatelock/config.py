from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    starting_keys: int = Field(
        default=3,
        ge=0,
        description="Keys granted on a new game",
        alias="FATELOCK_STARTING_KEYS",
    )
    pity_limit: int = Field(
        default=50,
        ge=1,
        le=50,
        description="Failed rolls in a row that earn a pity key",
        alias="FATELOCK_PITY_LIMIT",
    )
    rng_seed: Optional[int] = Field(
        default=None,
        description="Seed for the dice; unset means a fresh random session",
        alias="FATELOCK_RNG_SEED",
    )
    wiki_api_url: str = Field(
        default="https://oldschool.runescape.wiki/api.php",
        description="MediaWiki API queried for reveal artwork",
        alias="FATELOCK_WIKI_API_URL",
    )
    wiki_image_base_url: str = Field(
        default="https://oldschool.runescape.wiki/images/",
        description="Base URL for static item icons",
        alias="FATELOCK_WIKI_IMAGE_BASE_URL",
    )
    wiki_thumbnail_size: int = Field(
        default=600,
        description="Requested thumbnail width in pixels",
        alias="FATELOCK_WIKI_THUMBNAIL_SIZE",
    )
    wiki_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for a single artwork lookup",
        alias="FATELOCK_WIKI_TIMEOUT_SECONDS",
    )
    wiki_enrichment: bool = Field(
        default=True,
        description="Fetch artwork for region reveals in the background",
        alias="FATELOCK_WIKI_ENRICHMENT",
    )
    allowed_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to access the API",
        alias="FATELOCK_ALLOWED_ORIGINS",
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        env_prefix = "FATELOCK_"


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()


settings = get_settings()

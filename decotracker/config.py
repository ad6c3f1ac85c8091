from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "DecoTracker"
    debug: bool = False

    # Catalog sources: filesystem path or http(s) URL
    decoration_catalog_source: str = "data/decorations.json"
    obstacle_catalog_source: str = "data/obstacles.json"
    catalog_fetch_timeout: float = 10.0

    # Save documents deeper than this are truncated, not rejected
    max_extraction_depth: int = 512

    # Analysis sessions kept in memory for re-filtering
    max_sessions: int = 256

    placeholder_image: str = "images/placeholder.png"

    # Empty base URL disables image prefetching
    image_base_url: str = ""
    image_prefetch_timeout: float = 5.0


settings = Settings()

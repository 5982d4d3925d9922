"""Library configuration."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """HeroForge settings."""

    # Default viewport for new documents
    VIEWPORT_WIDTH: int = 1280
    VIEWPORT_HEIGHT: int = 720

    # Scale used for shader specs when the caller passes none
    PREVIEW_SCALE: float = 1.0

    # Log a warning when exporting a pipeline to the legacy effect struct drops data
    WARN_ON_LOSSY_EXPORT: bool = True

    # Document schema version written on save and after migration
    SCHEMA_VERSION: int = 1

    model_config = {"env_prefix": "HEROFORGE_"}


settings = Settings()

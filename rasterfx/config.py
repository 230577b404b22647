"""Library configuration."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """rasterfx settings, overridable through ``RASTERFX_*`` environment variables."""

    # Colors
    DEFAULT_BG_COLOR: str = "#000000"  # Rotate background and fill default
    SEPIA_TINT: tuple[int, int, int] = (100, 50, 0)

    # Filter defaults
    PIXELATE_BLOCK_SIZE: int = 10
    ROTATE_RESAMPLE: str = "bilinear"  # nearest, bilinear or bicubic

    # Text
    TEXT_FONT_SIZE: int = 32

    model_config = {"env_prefix": "RASTERFX_"}


settings = Settings()

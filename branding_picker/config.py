"""
Branding Picker Configuration
Manages environment variables and defaults for the HTTP service.
"""
import os
from typing import List


class Config:
    """Configuration class for the branding service."""

    # Upload limits
    MAX_FILE_MB: int = int(os.environ.get("BRANDING_MAX_FILE_MB", "10"))
    MAX_IMAGE_PIXELS: int = int(os.environ.get("BRANDING_MAX_IMAGE_PIXELS", "16000000"))

    # Logging
    LOG_LEVEL: str = os.environ.get("BRANDING_LOG_LEVEL", "INFO")

    # CORS
    ALLOWED_ORIGINS: str = os.environ.get("BRANDING_ALLOWED_ORIGINS", "")

    # Previews switch to white text at this contrast against white
    CONTRAST_FOREGROUND_THRESHOLD: float = float(
        os.environ.get("BRANDING_CONTRAST_FOREGROUND_THRESHOLD", "3.0")
    )

    # Supported image formats (SVG rasterization is not provided)
    SUPPORTED_MIME_TYPES = ["image/png", "image/jpeg", "image/gif", "image/webp"]
    SUPPORTED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".webp"}

    @classmethod
    def allowed_origins(cls) -> List[str]:
        """CORS origins; an empty setting allows any origin."""
        origins = [o.strip() for o in cls.ALLOWED_ORIGINS.split(",") if o.strip()]
        return origins or ["*"]

    @classmethod
    def validate_max_file_mb(cls, size_mb: int) -> bool:
        """Validate upload size limit."""
        return 1 <= size_mb <= 100

    @classmethod
    def validate_threshold(cls, threshold: float) -> bool:
        """Validate a contrast threshold (WCAG ratios span 1..21)."""
        return 1.0 <= threshold <= 21.0

    @classmethod
    def validate_max_image_pixels(cls, pixels: int) -> bool:
        """Validate decoded image pixel limit."""
        return 1 <= pixels <= 100_000_000

    @classmethod
    def validate(cls) -> None:
        """
        Check the loaded settings.

        Raises:
            ValueError: If any setting is out of range
        """
        if not cls.validate_max_file_mb(cls.MAX_FILE_MB):
            raise ValueError(f"BRANDING_MAX_FILE_MB must be 1-100, got {cls.MAX_FILE_MB}")
        if not cls.validate_max_image_pixels(cls.MAX_IMAGE_PIXELS):
            raise ValueError(
                f"BRANDING_MAX_IMAGE_PIXELS must be 1-100000000, got {cls.MAX_IMAGE_PIXELS}"
            )
        if not cls.validate_threshold(cls.CONTRAST_FOREGROUND_THRESHOLD):
            raise ValueError(
                "BRANDING_CONTRAST_FOREGROUND_THRESHOLD must be 1.0-21.0, "
                f"got {cls.CONTRAST_FOREGROUND_THRESHOLD}"
            )


# Global config instance
Config.validate()
config = Config()

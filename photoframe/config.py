import logging
import os
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class FrameSettings:
    port: int
    log_level: str
    timeout: float
    retries: int
    cache_ttl: float
    preview_delay: float
    full_quality: int
    thumb_quality: int
    max_upload_mb: int

    @classmethod
    def from_env(cls) -> "FrameSettings":
        return cls(
            port=int(os.getenv("PORT", "5500")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            timeout=float(os.getenv("SOURCE_TIMEOUT", "10.0")),
            retries=int(os.getenv("SOURCE_RETRIES", "2")),
            cache_ttl=float(os.getenv("CACHE_TTL", "30")),
            preview_delay=float(os.getenv("PREVIEW_DELAY", "0.2")),
            full_quality=int(os.getenv("FULL_QUALITY", "90")),
            thumb_quality=int(os.getenv("THUMB_QUALITY", "85")),
            max_upload_mb=int(os.getenv("MAX_UPLOAD_MB", "25")),
        )


SETTINGS = FrameSettings.from_env()


Color = Tuple[int, int, int]

# Colors as the panel actually shows them. Index-aligned with PALETTE_THEORETICAL.
PALETTE_MEASURED: Tuple[Color, ...] = (
    (2, 2, 2),
    (190, 190, 190),
    (205, 202, 0),
    (135, 19, 0),
    (0, 0, 0),
    (5, 64, 158),
    (39, 102, 60),
)

PALETTE_THEORETICAL: Tuple[Color, ...] = (
    (0, 0, 0),
    (255, 255, 255),
    (255, 255, 0),
    (255, 0, 0),
    (0, 0, 0),
    (0, 0, 255),
    (0, 255, 0),
)

# Duplicate black slot; kept for index alignment, never a match candidate.
EXCLUDED_INDEX = 4

FULL_SIZE: Tuple[int, int] = (800, 480)
THUMB_SIZE: Tuple[int, int] = (200, 120)
PREVIEW_SCALE = 0.4


def configure_logging() -> logging.Logger:
    logging.basicConfig(level=SETTINGS.log_level)
    return logging.getLogger("photoframe")

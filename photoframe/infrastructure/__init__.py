"""Infrastructure helpers for fetching, caching and preview scheduling."""

from .cache import CACHE, ResponseCache, render_key
from .network import FETCHER, SourceFetcher
from .responses import png_bytes, send_png
from .scheduler import PreviewResult, PreviewScheduler

__all__ = [
    "CACHE",
    "ResponseCache",
    "render_key",
    "FETCHER",
    "SourceFetcher",
    "png_bytes",
    "send_png",
    "PreviewResult",
    "PreviewScheduler",
]

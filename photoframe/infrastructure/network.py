from __future__ import annotations

import logging
import time
from typing import Callable

import requests
from PIL import Image

from ..config import SETTINGS
from ..errors import ProcessingFailure
from ..processing.resample import decode_image

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], requests.Session]


class SourceFetcher:
    def __init__(
        self,
        session_factory: SessionFactory | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._session_factory = session_factory or requests.Session
        self._session = self._create_session()
        self._sleep = sleep

    def _create_session(self) -> requests.Session:
        session = self._session_factory()
        session.headers.update({"User-Agent": "photoframe/1.0"})
        return session

    def fetch_bytes(self, url: str) -> bytes:
        last_exception: Exception | None = None
        for attempt in range(1, SETTINGS.retries + 2):
            try:
                response = self._session.get(url, timeout=SETTINGS.timeout)
                response.raise_for_status()
                return response.content
            except requests.RequestException as exc:
                last_exception = exc
                logger.warning("fetch %s failed (attempt %d): %s", url, attempt, exc)
                self._sleep(0.4 * attempt)
        raise ProcessingFailure(f"Could not fetch source image: {last_exception}") from last_exception

    def fetch_source(self, url: str) -> Image.Image:
        return decode_image(self.fetch_bytes(url))


FETCHER = SourceFetcher()

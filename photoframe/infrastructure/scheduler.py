"""Debounced, cancelable preview rendering.

Every ``schedule`` call bumps a generation counter. A render runs only after
the scheduler has been quiet for ``delay`` seconds. Its result is kept only if
no newer generation appeared while it ran. A superseded render produces
nothing: no result and no error.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..config import SETTINGS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreviewResult:
    generation: int
    value: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class PreviewScheduler:
    def __init__(
        self,
        render: Callable[..., Any],
        delay: Optional[float] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        self._render = render
        self._delay = SETTINGS.preview_delay if delay is None else delay
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="preview"
        )
        self._cond = threading.Condition()
        self._generation = 0
        self._settled = 0
        self._timer: Optional[threading.Timer] = None
        self._latest: Optional[PreviewResult] = None

    @property
    def generation(self) -> int:
        with self._cond:
            return self._generation

    def schedule(self, *args: Any, **kwargs: Any) -> int:
        """Replace any pending render with one for these arguments."""
        with self._cond:
            self._generation += 1
            generation = self._generation
            self._cancel_timer()
            timer = threading.Timer(self._delay, self._submit, args=(generation, args, kwargs))
            timer.daemon = True
            self._timer = timer
            timer.start()
        logger.debug("scheduled preview generation %d", generation)
        return generation

    def cancel(self) -> None:
        """Drop the pending or running render, if any."""
        with self._cond:
            self._generation += 1
            self._cancel_timer()
            self._settled = self._generation
            self._cond.notify_all()

    def latest(self) -> Optional[PreviewResult]:
        with self._cond:
            return self._latest

    def wait(self, timeout: Optional[float] = None) -> Optional[PreviewResult]:
        """Block until the newest generation has settled, then return ``latest()``."""
        with self._cond:
            self._cond.wait_for(lambda: self._settled >= self._generation, timeout)
            return self._latest

    def shutdown(self) -> None:
        self.cancel()
        self._executor.shutdown(wait=False)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def _submit(self, generation: int, args, kwargs) -> None:
        with self._cond:
            if not self._is_current(generation):
                return
            self._timer = None
        self._executor.submit(self._run, generation, args, kwargs)

    def _run(self, generation: int, args, kwargs) -> None:
        with self._cond:
            if not self._is_current(generation):
                logger.debug("preview generation %d cancelled before start", generation)
                return

        try:
            result = PreviewResult(generation, value=self._render(*args, **kwargs))
        except Exception as exc:
            logger.exception("preview generation %d failed", generation)
            result = PreviewResult(generation, error=exc)

        with self._cond:
            if not self._is_current(generation):
                logger.debug("preview generation %d superseded, discarding", generation)
                return
            self._latest = result
            self._settled = generation
            self._cond.notify_all()

"""HTTP client that downloads tile images with bounded retries."""

from __future__ import annotations

import logging
import random
import threading
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from typing import Callable, Optional

import httpx

from tilecoord.core.profile import DEFAULT_PROFILE, Profile
from tilecoord.core.tile import TileCoordinate
from tilecoord.settings import FetcherSettings

logger = logging.getLogger(__name__)

FetchCallback = Callable[[Optional[bytes]], None]


class FetchHandle:
    """Handle on one in-flight tile request.

    Every call to :meth:`TileFetcher.fetch` gets its own handle, so requests
    can be waited on or cancelled independently.
    """

    def __init__(self, url: str, future: Future, cancel_event: threading.Event) -> None:
        self.url = url
        self._future = future
        self._cancel_event = cancel_event

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def cancel(self) -> None:
        """Abandon the request; its callback will not be called."""
        self._cancel_event.set()
        self._future.cancel()

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: Optional[float] = None) -> Optional[bytes]:
        """Wait for the tile payload.

        Returns:
            Response body, or None on failure or cancellation
        """
        if self.cancelled:
            return None
        try:
            return self._future.result(timeout)
        except CancelledError:
            return None


class TileFetcher:
    """Fetch tile images over HTTP.

    A GET that answers 2xx yields the response body. 3xx and 4xx answers are
    final failures; transport errors and 5xx answers are retried until the
    retry budget runs out. Failures are reported as ``None``.
    """

    def __init__(
        self,
        settings: Optional[FetcherSettings] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            settings: Retry, timeout and worker settings
            client: HTTP client to use; one is created (and owned) if omitted
        """
        self._settings = settings or FetcherSettings()
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=self._settings.timeout_s)
        self._executor = ThreadPoolExecutor(
            max_workers=self._settings.max_workers,
            thread_name_prefix="tile-fetch",
        )

    def __enter__(self) -> TileFetcher:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Wait for running requests, then release the worker pool and client."""
        self._executor.shutdown(wait=True)
        if self._owns_client:
            self._client.close()

    def fetch(
        self,
        url: str,
        callback: Optional[FetchCallback] = None,
        max_retries: Optional[int] = None,
    ) -> FetchHandle:
        """Start fetching ``url`` in the background.

        Args:
            url: Tile URL
            callback: Called with the payload (or None) once the request ends,
                unless the handle was cancelled first
            max_retries: Overrides the configured retry budget

        Returns:
            Handle for waiting on or cancelling the request
        """
        retries = self._settings.max_retries if max_retries is None else max_retries
        cancel_event = threading.Event()
        future = self._executor.submit(self._fetch_with_retries, url, retries, cancel_event)
        handle = FetchHandle(url, future, cancel_event)
        if callback is not None:
            future.add_done_callback(lambda done: self._deliver(handle, done, callback))
        return handle

    def fetch_tile(
        self,
        tile: TileCoordinate,
        profile: Profile = DEFAULT_PROFILE,
        callback: Optional[FetchCallback] = None,
        max_retries: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> FetchHandle:
        """Fetch a tile using the URL rendered from the profile's template."""
        if not profile.url_template:
            raise ValueError(f"Profile '{profile.name}' has no url_template")
        return self.fetch(tile.to_url(profile=profile, rng=rng), callback=callback, max_retries=max_retries)

    def get(self, url: str, max_retries: Optional[int] = None) -> Optional[bytes]:
        """Fetch ``url`` and block until it completes."""
        return self.fetch(url, max_retries=max_retries).result()

    @staticmethod
    def _deliver(handle: FetchHandle, future: Future, callback: FetchCallback) -> None:
        if handle.cancelled or future.cancelled():
            logger.debug("Suppressed callback for cancelled fetch: %s", handle.url)
            return
        error = future.exception()
        if error is not None:
            logger.error("Fetch %s raised %s", handle.url, error)
            callback(None)
            return
        callback(future.result())

    def _fetch_with_retries(
        self,
        url: str,
        max_retries: int,
        cancel_event: threading.Event,
    ) -> Optional[bytes]:
        attempts = max_retries + 1
        for attempt in range(1, attempts + 1):
            if cancel_event.is_set():
                return None
            try:
                response = self._client.get(url)
            except httpx.InvalidURL as e:
                logger.warning("Fetch %s has an invalid url, giving up: %s", url, e)
                return None
            except httpx.RequestError as e:
                logger.warning("Fetch %s failed (attempt %d/%d): %s", url, attempt, attempts, e)
            else:
                status = response.status_code
                if 200 <= status < 300:
                    logger.debug("Fetched %s (%d bytes)", url, len(response.content))
                    return response.content
                if 300 <= status < 500:
                    logger.warning("Fetch %s returned HTTP %d, giving up", url, status)
                    return None
                logger.warning("Fetch %s returned HTTP %d (attempt %d/%d)", url, status, attempt, attempts)

            if attempt < attempts and cancel_event.wait(self._settings.retry_delay_s):
                return None

        logger.warning("Fetch %s failed after %d attempts", url, attempts)
        return None

"""ZIP bundle assembly for purchased artwork."""

import asyncio
import logging
import os
import tempfile
import time
import zipfile
from pathlib import Path
from typing import BinaryIO

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.api.middleware.error_handler import AssetFetchError
from src.core.config import get_settings
from src.schemas.checkout import CartItem

logger = logging.getLogger(__name__)

# Retry configuration for transport-level fetch failures
MAX_FETCH_ATTEMPTS = 3
MIN_WAIT_SECONDS = 0.5
MAX_WAIT_SECONDS = 4

ZIP_COMPRESS_LEVEL = 9


def artwork_name(index: int) -> str:
    """Archive member name for the 1-based cart position ``index``."""
    return f"Artwork_{index}.jpg"


def remove_scratch_file(path: str | Path) -> None:
    """Delete a scratch bundle, logging instead of raising on failure."""
    try:
        os.remove(path)
        logger.debug("Removed scratch bundle %s", path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.error("Failed to remove scratch bundle %s: %s", path, str(e))


class BundleService:
    """Builds a ZIP of cart artwork fetched from remote URLs.

    Assets are fetched one at a time and appended in cart order, so a cart
    of N items always yields ``Artwork_1.jpg`` .. ``Artwork_N.jpg``. Any
    failed fetch aborts the bundle and removes the partial file.
    """

    def __init__(self, http_client: httpx.AsyncClient | None = None) -> None:
        """Initialize bundle service.

        Args:
            http_client: Optional client to fetch assets with. When omitted
                a client is created, and closed, per bundle.
        """
        settings = get_settings()
        self.scratch_dir = Path(settings.bundle_scratch_dir)
        self.fetch_timeout = settings.asset_fetch_timeout_seconds
        self.bundle_timeout = settings.bundle_timeout_seconds
        self._http_client = http_client

    async def build_bundle(self, cart_items: list[CartItem]) -> Path:
        """Fetch every cart image and write them into a scratch ZIP file.

        Args:
            cart_items: Items in cart order.

        Returns:
            Path: Location of the finished archive. The caller owns it and
            must remove it with :func:`remove_scratch_file`.

        Raises:
            AssetFetchError: If any asset fails to download or the bundle
                deadline elapses.
        """
        self.scratch_dir.mkdir(parents=True, exist_ok=True)
        fd, scratch_path = tempfile.mkstemp(
            prefix=f"miraara_{int(time.time() * 1000)}_",
            suffix=".zip",
            dir=self.scratch_dir,
        )
        path = Path(scratch_path)

        completed = False
        try:
            with os.fdopen(fd, "wb") as fh:
                await asyncio.wait_for(
                    self._write_archive(fh, cart_items),
                    timeout=self.bundle_timeout,
                )
            completed = True
        except asyncio.TimeoutError as e:
            logger.error("Bundle not finished within %.0fs", self.bundle_timeout)
            raise AssetFetchError("Timed out generating download") from e
        finally:
            if not completed:
                remove_scratch_file(path)

        logger.info("Built bundle %s with %d artworks", path.name, len(cart_items))
        return path

    async def _write_archive(self, fh: BinaryIO, cart_items: list[CartItem]) -> None:
        if self._http_client is not None:
            await self._fill_archive(fh, cart_items, self._http_client)
            return

        async with httpx.AsyncClient(timeout=self.fetch_timeout, follow_redirects=True) as http:
            await self._fill_archive(fh, cart_items, http)

    async def _fill_archive(
        self,
        fh: BinaryIO,
        cart_items: list[CartItem],
        http: httpx.AsyncClient,
    ) -> None:
        with zipfile.ZipFile(
            fh,
            "w",
            compression=zipfile.ZIP_DEFLATED,
            compresslevel=ZIP_COMPRESS_LEVEL,
        ) as archive:
            for index, item in enumerate(cart_items, start=1):
                content = await self.fetch_asset(http, item.image)
                archive.writestr(artwork_name(index), content)

    async def fetch_asset(self, http: httpx.AsyncClient, url: str) -> bytes:
        """Download one asset.

        Args:
            http: Client to issue the request with.
            url: Asset URL.

        Returns:
            bytes: Response body.

        Raises:
            AssetFetchError: On transport errors (after retries), non-2xx
                responses or malformed URLs.
        """
        try:
            return await self._get_with_retry(http, url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error("Failed to fetch asset %s: %s", url, str(e))
            raise AssetFetchError("Error generating download") from e

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(MAX_FETCH_ATTEMPTS),
        wait=wait_exponential(multiplier=1, min=MIN_WAIT_SECONDS, max=MAX_WAIT_SECONDS),
        reraise=True,
    )
    async def _get_with_retry(self, http: httpx.AsyncClient, url: str) -> bytes:
        """GET an asset, retrying transient transport failures."""
        response = await http.get(url)
        response.raise_for_status()
        return response.content

"""Streaming transfer of STAC assets to files or streams."""

from contextlib import closing
from pathlib import Path
from typing import IO, Callable, Optional
import logging
import time

from stac_catalog_client.constants import DEFAULT_CHUNK_SIZE
from stac_catalog_client.exceptions import InvalidUrlError
from stac_catalog_client.models import Item
from stac_catalog_client.transport import HttpTransport
from stac_catalog_client.utils import name_from_href

logger = logging.getLogger(__name__)

# Type for progress callback: (bytes_transferred, total_bytes or 0 if unknown)
ProgressCallback = Callable[[int, int], None]


def copy_stream(
    source: IO[bytes],
    target: IO[bytes],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    progress_callback: Optional[ProgressCallback] = None,
    total_size: int = 0,
) -> int:
    """
    Copy all bytes from source to target through one reused buffer.

    At most ``chunk_size`` bytes are held in memory. Each read fills the
    buffer (possibly partially) and the filled part is written out before
    the next read, so a short final chunk is written like any other.

    Decoded HTTP streams (gzip, deflate) must honour the buffer length in
    ``readinto``, which urllib3 2 does.

    Returns:
        Number of bytes copied
    """
    buffer = bytearray(chunk_size)
    view = memoryview(buffer)
    copied = 0
    while True:
        count = source.readinto(buffer)
        if not count:
            break
        target.write(view[:count])
        copied += count
        if progress_callback:
            progress_callback(copied, total_size)
    return copied


class DownloadManager:
    """Moves asset bytes from the STAC service to local storage."""

    def __init__(
        self,
        transport: HttpTransport,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        """
        Initialize download manager.

        Args:
            transport: Authenticated transport used to open asset streams
            chunk_size: Transfer buffer size in bytes
        """
        self._transport = transport
        self._chunk_size = chunk_size

    def open_stream(self, url: str) -> IO[bytes]:
        """
        Open a readable stream positioned at the start of the asset payload.

        The caller owns the returned stream and must close it.
        """
        logger.info(f"Opening stream: {url}")
        return self._transport.get(url).raw

    def transfer_to_stream(
        self,
        url: str,
        target: IO[bytes],
        progress_callback: Optional[ProgressCallback] = None,
    ) -> int:
        """
        Copy an asset into a caller-owned writable stream (left open).

        Returns:
            Number of bytes written
        """
        logger.info(f"Downloading: {url}")
        with closing(self._transport.get(url)) as response:
            total_size = int(response.headers.get("content-length", 0) or 0)
            return copy_stream(
                response.raw, target, self._chunk_size, progress_callback, total_size
            )

    def transfer_to_file(
        self,
        url: str,
        folder: Path,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> Path:
        """
        Download a single asset into a folder.

        The file name is the part of the URL after its last '/'.

        Args:
            url: Asset URL
            folder: Destination folder (created if missing)
            progress_callback: Optional callback for progress updates

        Returns:
            Path to downloaded file

        Raises:
            InvalidUrlError: If the URL is malformed or has no file name
            requests.RequestException: If the transfer fails
            OSError: If the file cannot be written
        """
        filename = name_from_href(url)
        if not filename:
            raise InvalidUrlError(url, "no file name after last '/'")

        folder = Path(folder)
        output_path = folder / filename

        t0 = time.monotonic()
        with closing(self._transport.get(url)) as response:
            total_size = int(response.headers.get("content-length", 0) or 0)
            folder.mkdir(parents=True, exist_ok=True)

            logger.info(f"Downloading: {url}")
            logger.debug(f"  -> {output_path}")

            with open(output_path, "wb") as f:
                downloaded = copy_stream(
                    response.raw, f, self._chunk_size, progress_callback, total_size
                )
        elapsed = time.monotonic() - t0

        # Log transfer rate
        if elapsed > 0 and downloaded > 0:
            rate_mbps = (downloaded / (1024 * 1024)) / elapsed
            size_mb = downloaded / (1024 * 1024)
            logger.info(f"Download complete: {output_path} ({size_mb:.1f} MB, {rate_mbps:.1f} MB/s)")
        else:
            logger.info(f"Download complete: {output_path}")
        return output_path

    def transfer_item(self, item: Item, folder: Path) -> dict[str, Path]:
        """
        Download every asset of an item into ``folder/<item.id>``.

        Assets are fetched one after another in the item's order. The first
        failure stops the transfer and propagates; files already written
        stay on disk.

        Returns:
            Dictionary mapping asset key to local path
        """
        results: dict[str, Path] = {}
        if not item.assets:
            logger.info(f"Item {item.id} has no assets")
            return results

        target = Path(folder) / item.id
        target.mkdir(parents=True, exist_ok=True)

        total = len(item.assets)
        width = len(str(total))
        for i, (key, asset) in enumerate(item.assets.items(), 1):
            logger.info(f"[{i:>{width}}/{total}] Asset {key}")
            results[key] = self.transfer_to_file(asset.href, target)

        return results

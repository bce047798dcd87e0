"""
Download of the upstream stub release archive.
"""

import logging
from pathlib import Path
from typing import Optional

import requests

from phalconautocomplete.core.config import Settings
from phalconautocomplete.core.errors import DownloadError

logger = logging.getLogger(__name__)


def download_archive(
    url: str,
    destination: Path,
    settings: Settings,
    session: Optional[requests.Session] = None
) -> Path:
    """
    Fetch ``url`` with a single GET, following redirects, into ``destination``.

    Args:
        url: Archive URL
        destination: File to write the response body to
        settings: Supplies request headers, timeout and chunk size
        session: Optional requests session, a plain ``requests.get`` is used otherwise

    Raises:
        DownloadError: On transport errors, HTTP error statuses, or when no file was written
    """
    headers = {
        "Accept": settings.accept_header,
        "User-Agent": settings.user_agent,
    }
    http = session or requests

    logger.info(f"Downloading {url}")
    try:
        with http.get(
            url,
            headers=headers,
            stream=True,
            allow_redirects=True,
            timeout=settings.download_timeout
        ) as response:
            response.raise_for_status()
            with open(destination, "wb") as f:
                for chunk in response.iter_content(chunk_size=settings.download_chunk_size):
                    if chunk:
                        f.write(chunk)
    except (requests.RequestException, OSError) as e:
        destination.unlink(missing_ok=True)
        raise DownloadError(f"Failed to download {url}: {e}") from e

    if not destination.is_file():
        raise DownloadError("Downloaded file not found")
    logger.info(f"Downloaded file saved to {destination}")
    return destination

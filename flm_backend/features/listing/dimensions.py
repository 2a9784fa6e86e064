"""
Image dimension probes.

Local backends read the image header straight from disk. Cloud backends have
no filesystem path; when enabled, the image is fetched over its public URL and
decoded in memory instead.
"""

from __future__ import annotations

import io
from typing import IO, Optional, Union

import httpx
from PIL import Image

from flm_shared import ErrorCode, Result, sanitize_error_message

from ...adapters.storage import StorageBackend
from ...config import ListingConfig
from .models import RawEntry

Dimensions = tuple[int, int]


def read_image_size(source: Union[str, IO[bytes]]) -> Result[Dimensions]:
    """Width and height from an image header. Never raises."""
    try:
        with Image.open(source) as img:
            width, height = img.size
    except Exception as exc:
        return Result.Err(ErrorCode.PROBE_FAILED, sanitize_error_message(exc, "Unreadable image"))
    if not width:
        return Result.Err(ErrorCode.PROBE_FAILED, "Image reports zero width")
    return Result.Ok((int(width), int(height)))


def probe_dimensions_from_url(
    url: str,
    timeout: float = 10.0,
    client: Optional[httpx.Client] = None,
) -> Result[Dimensions]:
    """Download the image behind `url`, measure it, discard the bytes."""
    try:
        if client is not None:
            response = client.get(url, follow_redirects=True)
        else:
            with httpx.Client(timeout=timeout, follow_redirects=True) as own_client:
                response = own_client.get(url)
        response.raise_for_status()
    except httpx.TimeoutException as exc:
        return Result.Err(ErrorCode.TIMEOUT, sanitize_error_message(exc, "Image download timed out"))
    except httpx.HTTPError as exc:
        return Result.Err(ErrorCode.PROBE_FAILED, sanitize_error_message(exc, "Image download failed"))
    except (httpx.InvalidURL, httpx.StreamError) as exc:
        # Neither derives from HTTPError; object keys may hold control characters.
        return Result.Err(ErrorCode.PROBE_FAILED, sanitize_error_message(exc, "Image download failed"))
    return read_image_size(io.BytesIO(response.content))


def probe_dimensions(
    entry: RawEntry,
    storage: StorageBackend,
    config: ListingConfig,
    client: Optional[httpx.Client] = None,
) -> Result[Dimensions]:
    if entry.is_dir:
        return Result.Err(ErrorCode.INVALID_INPUT, "Directories have no dimensions")

    if storage.capabilities.local_paths and not config.is_cloud_disk:
        return read_image_size(storage.path(entry.path))

    if config.probe_cloud_dimensions:
        return probe_dimensions_from_url(storage.url(entry.path), timeout=config.http_timeout, client=client)

    return Result.Err(ErrorCode.UNSUPPORTED, "Dimension probing disabled for this backend")

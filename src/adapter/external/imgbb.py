"""imgbb adapter: implements ImageHostPort against the imgbb upload API.

API Documentation: https://api.imgbb.com/
"""

import logging
import os

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from domain.model.errors import UploadError

logger = logging.getLogger(__name__)

IMGBB_UPLOAD_URL = "https://api.imgbb.com/1/upload"
UPLOAD_TIMEOUT_SECONDS = 30.0


class ImgbbImageHost:
    """Uploads images to imgbb and returns their public URL."""

    def __init__(self, api_key: str | None = None):
        self.api_key = api_key or os.getenv("IMGBB_API_KEY")

    async def upload(self, content: bytes, filename: str) -> str:
        if not self.api_key:
            raise UploadError("Image host is not configured")

        try:
            async with httpx.AsyncClient(timeout=UPLOAD_TIMEOUT_SECONDS) as client:
                response = await _post_with_retry(
                    client,
                    IMGBB_UPLOAD_URL,
                    data={'key': self.api_key},
                    files={'image': (filename, content)},
                )
                data = response.json()
        except httpx.HTTPError as e:
            logger.warning("Image upload request error", extra={"error_type": type(e).__name__})
            raise UploadError()
        except ValueError:
            logger.warning("Image host returned a non-JSON body", extra={"status_code": response.status_code})
            raise UploadError()

        if not data.get('success'):
            message = (data.get('error') or {}).get('message') or "Upload failed"
            logger.warning("Image upload rejected", extra={"status_code": response.status_code, "reason": message})
            raise UploadError(message)

        url = data['data']['url']
        logger.info("Image uploaded", extra={"filename": filename, "bytes": len(content)})
        return url


@retry(
    retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=4),
    reraise=True,
)
async def _post_with_retry(client: httpx.AsyncClient, url: str, **kwargs) -> httpx.Response:
    """POST with automatic retry on transient failures."""
    return await client.post(url, **kwargs)

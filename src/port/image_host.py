"""Port definition for the external image host."""

from typing import Protocol


class ImageHostPort(Protocol):
    async def upload(self, content: bytes, filename: str) -> str:
        """Upload an image and return its public URL. Raises UploadError."""
        ...

"""In-memory implementation of ImageHostPort for testing."""

from domain.model.errors import UploadError


class FakeImageHost:
    def __init__(self, fail: bool = False):
        self.uploads: dict[str, bytes] = {}
        self.fail = fail

    async def upload(self, content: bytes, filename: str) -> str:
        if self.fail:
            raise UploadError()
        url = f"https://images.example.test/{len(self.uploads) + 1}/{filename}"
        self.uploads[url] = content
        return url

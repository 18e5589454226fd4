import logging

from client.session import SessionStore
from domain.model.errors import UploadError
from domain.model.user import User
from port.image_host import ImageHostPort

logger = logging.getLogger(__name__)


async def update_profile_photo(
    store: SessionStore,
    image_host: ImageHostPort,
    content: bytes,
    filename: str,
) -> User | None:
    """Upload a profile photo and save its URL on the profile.

    Returns the refreshed user, or None with the reason in
    `store.session.last_error`.
    """
    if not store.session.is_authenticated:
        store.session.last_error = "Not authenticated"
        return None
    try:
        url = await image_host.upload(content, filename)
    except UploadError as e:
        logger.warning("Profile photo upload failed", extra={"filename": filename})
        store.session.last_error = str(e)
        return None
    return await store.update_profile(profile_image=url)

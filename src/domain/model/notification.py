import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum


class NotificationType(str, Enum):
    SYSTEM = 'SYSTEM'
    ACCOUNT = 'ACCOUNT'
    ORDER = 'ORDER'
    PRODUCT = 'PRODUCT'


@dataclass
class Notification:
    """A message addressed to one user."""
    id: str
    user_id: str
    title: str
    message: str
    type: NotificationType
    created_at: datetime
    read: bool = False

    @classmethod
    def create(
        cls,
        user_id: str,
        title: str,
        message: str,
        type: NotificationType = NotificationType.SYSTEM,
    ) -> 'Notification':
        return cls(
            id=uuid.uuid4().hex,
            user_id=user_id,
            title=title,
            message=message,
            type=type,
            created_at=datetime.now(timezone.utc),
        )

"""Profile domain model: one-to-one extension of a user."""

from dataclasses import dataclass, fields, replace


@dataclass
class Profile:
    """Contact details and role-specific data attached to a user."""
    phone: str | None = None
    address: str | None = None
    business_name: str | None = None
    business_description: str | None = None
    preferences: str | None = None
    profile_image: str | None = None
    email_notifications: bool = True
    order_updates: bool = True

    def merged(self, updates: dict) -> 'Profile':
        """Return a copy with known fields overwritten. None values are skipped."""
        known = {k: v for k, v in updates.items() if k in PROFILE_FIELDS and v is not None}
        return replace(self, **known)

    def to_dict(self) -> dict:
        return {name: getattr(self, name) for name in PROFILE_FIELDS}

    @classmethod
    def from_dict(cls, data: dict | None) -> 'Profile | None':
        if data is None:
            return None
        return cls(**{k: v for k, v in data.items() if k in PROFILE_FIELDS})


PROFILE_FIELDS = tuple(f.name for f in fields(Profile))

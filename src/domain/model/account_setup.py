"""Account setup rules shared by the client wizard and the API.

Both layers call `validate_setup_profile` so the required-field rules
cannot drift apart.
"""

from domain.model.user import AccountType, SELECTABLE_ACCOUNT_TYPES

# Ordered: the first missing field is the one surfaced to the user.
REQUIRED_FIELDS: dict[AccountType, tuple[str, ...]] = {
    AccountType.SELLER: ('business_name', 'phone', 'address'),
    AccountType.BUYER: ('phone', 'address'),
}

# Fields each role may submit during setup.
ALLOWED_FIELDS: dict[AccountType, tuple[str, ...]] = {
    AccountType.SELLER: ('business_name', 'business_description', 'phone', 'address'),
    AccountType.BUYER: ('phone', 'address', 'preferences'),
}

FIELD_MESSAGES = {
    'business_name': "Business name is required",
    'phone': "Phone number is required",
    'address': "Address is required",
}


def parse_account_type(value) -> AccountType | None:
    """Return a selectable AccountType, or None if value is not buyer/seller."""
    try:
        account_type = AccountType(value)
    except ValueError:
        return None
    if account_type not in SELECTABLE_ACCOUNT_TYPES:
        return None
    return account_type


def validate_setup_profile(account_type: AccountType, profile: dict) -> dict[str, str]:
    """Return {field: message} for every required field left blank."""
    errors: dict[str, str] = {}
    for name in REQUIRED_FIELDS.get(account_type, ()):
        value = profile.get(name)
        if not isinstance(value, str) or not value.strip():
            errors[name] = FIELD_MESSAGES[name]
    return errors


def first_error(errors: dict[str, str]) -> str | None:
    return next(iter(errors.values()), None)


def build_setup_profile(account_type: AccountType, form: dict) -> dict:
    """Select the fields a role submits. Blank optional fields are dropped."""
    profile = {}
    for name in ALLOWED_FIELDS[account_type]:
        value = form.get(name)
        if isinstance(value, str):
            value = value.strip()
        if value or name in REQUIRED_FIELDS[account_type]:
            profile[name] = value
    return profile

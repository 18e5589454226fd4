"""Account setup wizard.

Three steps, modelled as a tagged union of states:

    SelectingRole(role)   step 0, role may still be None
    EnteringDetails(role) step 1, filling in the role's form
    Confirming(role, profile) step 2, profile is what will be submitted

Sellers and buyers each have their own form. Going back to step 0 and
picking the other role keeps whatever was typed into the first form.
"""

import logging
from dataclasses import dataclass

from client.session import SessionStore
from domain.model.account_setup import (
    ALLOWED_FIELDS,
    build_setup_profile,
    first_error,
    parse_account_type,
    validate_setup_profile,
)
from domain.model.errors import InvalidAccountTypeError, ValidationError
from domain.model.user import AccountType, User

logger = logging.getLogger(__name__)

STEP_LABELS: dict[AccountType, tuple[str, str, str]] = {
    AccountType.SELLER: ("Account Type", "Business Details", "Verification"),
    AccountType.BUYER: ("Account Type", "Personal Details", "Preferences"),
}
DEFAULT_STEP_LABELS = ("Account Type", "Details", "Confirm")

SELECT_ROLE_MESSAGE = "Please select an account type"


@dataclass(frozen=True)
class SelectingRole:
    role: AccountType | None = None
    step = 0


@dataclass(frozen=True)
class EnteringDetails:
    role: AccountType
    step = 1


@dataclass(frozen=True)
class Confirming:
    role: AccountType
    profile: dict
    step = 2


WizardState = SelectingRole | EnteringDetails | Confirming


class AccountSetupWizard:
    def __init__(self, store: SessionStore):
        self.store = store
        self.state: WizardState = SelectingRole()
        self.forms: dict[AccountType, dict[str, str]] = {
            role: {name: '' for name in fields} for role, fields in ALLOWED_FIELDS.items()
        }
        self.field_errors: dict[str, str] = {}
        self.error: str | None = None
        self.completed = False
        self._submitting = False

    @property
    def step(self) -> int:
        return self.state.step

    @property
    def role(self) -> AccountType | None:
        return self.state.role

    @property
    def steps(self) -> tuple[str, str, str]:
        return STEP_LABELS.get(self.role, DEFAULT_STEP_LABELS)

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    @property
    def form(self) -> dict[str, str] | None:
        """Form of the selected role, or None before a role is picked."""
        return self.forms.get(self.role)

    def select_role(self, role) -> None:
        if not isinstance(self.state, SelectingRole):
            raise ValidationError("Account type can only be chosen on the first step")
        account_type = parse_account_type(role)
        if account_type is None:
            raise InvalidAccountTypeError()
        self.state = SelectingRole(account_type)
        self.field_errors = {}
        self.error = None

    def set_field(self, name: str, value: str) -> None:
        if self.role is None:
            raise ValidationError(SELECT_ROLE_MESSAGE)
        form = self.forms[self.role]
        if name not in form:
            raise ValidationError(f"Unknown field: {name}")
        form[name] = value
        self.field_errors.pop(name, None)
        if isinstance(self.state, Confirming):
            self.state = Confirming(self.role, build_setup_profile(self.role, form))

    def next(self) -> bool:
        """Advance one step. Returns False when the current step is incomplete."""
        state = self.state
        if isinstance(state, SelectingRole):
            if state.role is None:
                self.error = SELECT_ROLE_MESSAGE
                return False
            self.error = None
            self.state = EnteringDetails(state.role)
            return True
        if isinstance(state, EnteringDetails):
            if not self._validate(state.role):
                return False
            self.state = Confirming(state.role, build_setup_profile(state.role, self.forms[state.role]))
            return True
        return False

    def back(self) -> None:
        state = self.state
        self.error = None
        if isinstance(state, Confirming):
            self.state = EnteringDetails(state.role)
        elif isinstance(state, EnteringDetails):
            self.state = SelectingRole(state.role)

    async def submit(self) -> User | None:
        """Send the confirmed profile. A submit while another is in flight is ignored."""
        if self._submitting or not isinstance(self.state, Confirming):
            return None
        role = self.state.role
        if not self._validate(role):
            return None

        profile = build_setup_profile(role, self.forms[role])
        self._submitting = True
        try:
            user = await self.store.update_account_type(role, profile)
        finally:
            self._submitting = False

        if user is None:
            self.error = self.store.session.last_error or "Account setup failed"
            logger.info("Account setup rejected", extra={"account_type": role.value})
            return None
        self.completed = True
        return user

    def _validate(self, role: AccountType) -> bool:
        errors = validate_setup_profile(role, self.forms[role])
        self.field_errors = errors
        self.error = first_error(errors)
        return not errors

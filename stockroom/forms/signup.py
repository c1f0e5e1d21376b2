"""
Signup Form
In-memory state of one signup form instance, driven by provisioning transitions
"""

import asyncio
import logging
from typing import Callable, Dict, Optional

from stockroom.models.account import UsernameAvailability
from stockroom.models.errors import (
    StoreConflictError, StoreError, ValidationFailed, PartialProvisioningError
)
from stockroom.models.provisioning import (
    ProvisioningState, ProvisioningOutcome, ProvisioningSuccess,
    AccountCreatedProfileFailed, ProvisioningRejected
)
from stockroom.schemas.auth import RegistrationRequest
from stockroom.services.provisioning_service import ProvisioningService
from stockroom.services.username_checker import UsernameAvailabilityChecker
from stockroom.utils.config import get_app_config

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
REDIRECT_DELAY_SECONDS = 2.0

SIGNUP_SUCCESS_MESSAGE = "Account created successfully! Redirecting to login..."
PROFILE_CONFLICT_MESSAGE = "Profile save failed: that username or account already has a profile."
PROFILE_UNAVAILABLE_MESSAGE = "The profile service could not be reached."


def describe_store_error(error: StoreError) -> str:
    if isinstance(error, StoreConflictError):
        return PROFILE_CONFLICT_MESSAGE
    return PROFILE_UNAVAILABLE_MESSAGE


def describe_partial_failure(error: PartialProvisioningError) -> str:
    """Message for an account that exists without a profile; never a plain 'try again'"""
    return (
        "Your account was created, but your profile details could not be saved. "
        f"{describe_store_error(error.cause)} "
        "Please contact support to finish setting up your profile. "
        "Signing up again will not work because the account already exists."
    )


def describe_outcome(outcome: ProvisioningOutcome) -> str:
    """User-facing text for a finished signup"""
    if isinstance(outcome, ProvisioningSuccess):
        return SIGNUP_SUCCESS_MESSAGE
    if isinstance(outcome, AccountCreatedProfileFailed):
        return describe_partial_failure(outcome.as_error())
    return outcome.error.message


class SignupForm:
    """
    Owns the form state the page renders: messages, field errors, username
    hint and the submit button's disabled flag. Navigation happens only after
    a fully successful signup.
    """

    def __init__(
        self,
        provisioning: ProvisioningService,
        profiles,
        navigate: Callable[[str], None],
        debounce: Optional[float] = None
    ):
        if debounce is None:
            debounce = get_app_config().username_check_debounce
        self.provisioning = provisioning
        self.navigate = navigate
        self.error = ""
        self.success = ""
        self.field_errors: Dict[str, str] = {}
        self.username_status: Optional[UsernameAvailability] = None
        self._navigation_task: Optional[asyncio.Task] = None

        self.checker = UsernameAvailabilityChecker(profiles, self._on_username_result, debounce)
        self._unsubscribe = provisioning.subscribe(self._on_transition)

    @property
    def loading(self) -> bool:
        return self.provisioning.is_running

    @property
    def submit_disabled(self) -> bool:
        return self.loading

    def on_username_changed(self, value: str) -> asyncio.Task:
        """Input handler for the username field"""
        return self.checker.request_check(value)

    def _on_username_result(self, result: UsernameAvailability):
        self.username_status = result

    def _on_transition(self, state: ProvisioningState, outcome: Optional[ProvisioningOutcome]):
        if state == ProvisioningState.VALIDATING:
            self.error = ""
            self.success = ""
            self.field_errors = {}
        elif state == ProvisioningState.DONE and outcome is not None:
            self._apply_outcome(outcome)

    def _apply_outcome(self, outcome: ProvisioningOutcome):
        if isinstance(outcome, ProvisioningSuccess):
            self.success = describe_outcome(outcome)
            self._navigation_task = asyncio.create_task(self._navigate_later())
            return

        self.error = describe_outcome(outcome)
        if isinstance(outcome, ProvisioningRejected) and isinstance(outcome.error, ValidationFailed):
            self.field_errors = outcome.error.errors

    async def _navigate_later(self):
        await asyncio.sleep(REDIRECT_DELAY_SECONDS)
        self.navigate(LOGIN_PATH)

    async def submit(self, request: RegistrationRequest) -> Optional[ProvisioningOutcome]:
        """
        Submit handler

        Returns:
            The outcome, or None when the submission was ignored because a
            previous one is still in flight
        """
        if self.submit_disabled:
            logger.warning("Ignoring signup submission while another is in progress")
            return None
        return await self.provisioning.run(request)

    async def wait_for_navigation(self):
        if self._navigation_task is not None:
            await self._navigation_task

    def close(self):
        """Tear down background work when the form goes away"""
        self._unsubscribe()
        self.checker.cancel()
        if self._navigation_task is not None and not self._navigation_task.done():
            self._navigation_task.cancel()

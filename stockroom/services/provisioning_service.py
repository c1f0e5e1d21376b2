"""
Provisioning Service
Signup orchestration: validation, account creation, profile creation
"""

from typing import Callable, List, Optional
import logging

from stockroom.models.account import AccountIdentity
from stockroom.models.errors import (
    ProviderError, StoreError, StoreTransportError, ValidationFailed, ProvisioningInProgressError
)
from stockroom.models.provisioning import (
    ProvisioningState, ACTIVE_STATES, ProvisioningOutcome, ProvisioningSuccess,
    AccountCreatedProfileFailed, ProvisioningRejected
)
from stockroom.schemas.auth import RegistrationRequest
from stockroom.utils.logger import get_audit_logger
from stockroom.utils.validators import validate_registration

logger = logging.getLogger(__name__)

StateListener = Callable[[ProvisioningState, Optional[ProvisioningOutcome]], None]


class ProvisioningService:
    """
    Runs one signup at a time for a single form instance.

    States move IDLE -> VALIDATING -> CREATING_ACCOUNT -> CREATING_PROFILE -> DONE,
    with validation or sign-up failures jumping straight to DONE. A profile
    failure after the account exists is reported as AccountCreatedProfileFailed
    and is not rolled back.
    """

    def __init__(self, credentials, profiles):
        """
        Args:
            credentials: CredentialProviderClient (or compatible fake)
            profiles: ProfileStoreClient (or compatible fake)
        """
        self.credentials = credentials
        self.profiles = profiles
        self.state = ProvisioningState.IDLE
        self.outcome: Optional[ProvisioningOutcome] = None
        self._listeners: List[StateListener] = []
        self.audit = get_audit_logger()

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a transition listener; returns an unsubscribe callable"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def is_running(self) -> bool:
        return self.state in ACTIVE_STATES

    def _transition(self, state: ProvisioningState, outcome: Optional[ProvisioningOutcome] = None):
        logger.debug(f"Provisioning state {self.state.value} -> {state.value}")
        self.state = state
        self.outcome = outcome
        for listener in list(self._listeners):
            listener(state, outcome)

    def _finish(self, outcome: ProvisioningOutcome) -> ProvisioningOutcome:
        self._transition(ProvisioningState.DONE, outcome)
        return outcome

    async def run(self, request: RegistrationRequest) -> ProvisioningOutcome:
        """
        Provision an account and its profile

        Args:
            request: Signup form data

        Returns:
            ProvisioningOutcome: Success, partial failure, or rejection

        Raises:
            ProvisioningInProgressError: A previous run has not finished
        """
        if self.is_running:
            raise ProvisioningInProgressError()

        self._transition(ProvisioningState.VALIDATING)
        errors = validate_registration(request)
        if errors:
            logger.debug(f"Signup rejected by validation: {sorted(errors)}")
            return self._finish(ProvisioningRejected(ValidationFailed(errors)))

        self._transition(ProvisioningState.CREATING_ACCOUNT)
        try:
            identity: AccountIdentity = await self.credentials.sign_up(request.email, request.password)
        except ProviderError as e:
            logger.error(f"Account creation failed for {request.email}: {e.message}")
            self.audit.log_account_event('signup_rejected', email=request.email,
                                         details={'reason': e.message}, severity='warning')
            return self._finish(ProvisioningRejected(e))
        except Exception as e:
            logger.exception(f"Unexpected error creating account for {request.email}: {e}")
            error = ProviderError("Failed to create account")
            self.audit.log_account_event('signup_rejected', email=request.email,
                                         details={'reason': str(e)}, severity='error')
            return self._finish(ProvisioningRejected(error))

        self.audit.log_account_event('account_created', email=identity.email, user_id=identity.user_id)

        self._transition(ProvisioningState.CREATING_PROFILE)
        try:
            await self.profiles.create_profile(identity.user_id, request.profile_fields())
        except StoreError as e:
            logger.error(f"Profile creation failed for user {identity.user_id}: {e.message}")
            self.audit.log_account_event('profile_failed', email=identity.email, user_id=identity.user_id,
                                         details={'reason': e.message}, severity='error')
            return self._finish(AccountCreatedProfileFailed(identity, e))
        except Exception as e:
            logger.exception(f"Unexpected error saving profile for user {identity.user_id}: {e}")
            error = StoreTransportError("Profile save failed")
            self.audit.log_account_event('profile_failed', email=identity.email, user_id=identity.user_id,
                                         details={'reason': str(e)}, severity='error')
            return self._finish(AccountCreatedProfileFailed(identity, error))

        self.audit.log_account_event('profile_created', email=identity.email, user_id=identity.user_id)
        return self._finish(ProvisioningSuccess(identity))

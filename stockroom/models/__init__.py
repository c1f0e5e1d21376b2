from .account import AccountIdentity, Session, ProfileRecord, UsernameAvailability
from .errors import (
    StockroomError, ValidationFailed, ProviderError, StoreError, StoreConflictError,
    StoreTransportError, PartialProvisioningError, ProvisioningInProgressError,
    LoginError, MissingFieldError, LoginRejectedError
)
from .provisioning import (
    ProvisioningState, ACTIVE_STATES, ProvisioningSuccess, AccountCreatedProfileFailed,
    ProvisioningRejected, ProvisioningOutcome
)

__all__ = [
    "AccountIdentity",
    "Session",
    "ProfileRecord",
    "UsernameAvailability",
    "StockroomError",
    "ValidationFailed",
    "ProviderError",
    "StoreError",
    "StoreConflictError",
    "StoreTransportError",
    "PartialProvisioningError",
    "ProvisioningInProgressError",
    "LoginError",
    "MissingFieldError",
    "LoginRejectedError",
    "ProvisioningState",
    "ACTIVE_STATES",
    "ProvisioningSuccess",
    "AccountCreatedProfileFailed",
    "ProvisioningRejected",
    "ProvisioningOutcome",
]

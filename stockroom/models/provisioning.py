"""
Provisioning Models
Orchestrator states and tagged outcomes
"""

from enum import Enum
from dataclasses import dataclass
from typing import Union

from stockroom.models.account import AccountIdentity
from stockroom.models.errors import ProviderError, StoreError, ValidationFailed, PartialProvisioningError


class ProvisioningState(str, Enum):
    """Signup orchestration state"""
    IDLE = "idle"
    VALIDATING = "validating"
    CREATING_ACCOUNT = "creating_account"
    CREATING_PROFILE = "creating_profile"
    DONE = "done"


# States during which the submit action must stay disabled
ACTIVE_STATES = frozenset({
    ProvisioningState.VALIDATING,
    ProvisioningState.CREATING_ACCOUNT,
    ProvisioningState.CREATING_PROFILE,
})


@dataclass(frozen=True)
class ProvisioningSuccess:
    """Account and profile both created"""
    identity: AccountIdentity


@dataclass(frozen=True)
class AccountCreatedProfileFailed:
    """Account created, profile insert failed; nothing is rolled back"""
    identity: AccountIdentity
    error: StoreError

    def as_error(self) -> PartialProvisioningError:
        return PartialProvisioningError(self.identity.user_id, self.error)


@dataclass(frozen=True)
class ProvisioningRejected:
    """Nothing was created"""
    error: Union[ValidationFailed, ProviderError]


ProvisioningOutcome = Union[ProvisioningSuccess, AccountCreatedProfileFailed, ProvisioningRejected]

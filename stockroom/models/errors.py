"""
Error Taxonomy
Exceptions raised across validation, provider, store and login paths
"""

from typing import Dict, Optional


class StockroomError(Exception):
    """Base class for all stockroom errors"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(StockroomError):
    """Submitted form data failed local validation"""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("Please correct the highlighted fields")
        self.errors = dict(errors)


class ProviderError(StockroomError):
    """Credential provider rejected the call or could not be reached"""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class StoreError(StockroomError):
    """Profile store failure"""


class StoreConflictError(StoreError):
    """A profile with the same user id or username already exists"""


class StoreTransportError(StoreError):
    """Network or service fault talking to the profile store"""


class PartialProvisioningError(StockroomError):
    """Account exists at the provider but its profile record does not"""

    def __init__(self, user_id: str, cause: StoreError):
        super().__init__(f"Account {user_id} created without a profile: {cause.message}")
        self.user_id = user_id
        self.cause = cause


class ProvisioningInProgressError(StockroomError):
    """A signup run is already active for this form"""

    def __init__(self):
        super().__init__("A signup request is already in progress")


class LoginError(StockroomError):
    """Base class for login failures"""


class MissingFieldError(LoginError):
    """A required login field was left empty"""

    def __init__(self, field: str):
        super().__init__(f"{field.capitalize()} is required")
        self.field = field


class LoginRejectedError(LoginError):
    """The credential provider refused the login"""

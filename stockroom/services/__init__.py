from .auth_service import AuthService
from .provisioning_service import ProvisioningService
from .username_checker import UsernameAvailabilityChecker

__all__ = ["AuthService", "ProvisioningService", "UsernameAvailabilityChecker"]

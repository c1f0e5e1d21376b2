"""
Authentication Service
Login gate in front of the credential provider
"""

import logging

from stockroom.models.account import Session
from stockroom.models.errors import ProviderError, MissingFieldError, LoginRejectedError
from stockroom.utils.logger import get_audit_logger
from stockroom.utils.validators import validate_login

logger = logging.getLogger(__name__)


class AuthService:
    """Customer login and session lookup"""

    def __init__(self, credentials):
        self.credentials = credentials
        self.audit = get_audit_logger()

    async def login(self, email: str, password: str) -> Session:
        """
        Authenticate customer

        Args:
            email: Customer email
            password: Customer password

        Returns:
            Session: Session established by the provider

        Raises:
            MissingFieldError: email or password left empty (no provider call)
            LoginRejectedError: provider refused the credentials
        """
        errors = validate_login(email, password)
        if errors:
            raise MissingFieldError(next(iter(errors)))

        try:
            session = await self.credentials.sign_in(email, password)
        except ProviderError as e:
            self.audit.log_account_event('login_rejected', email=email,
                                         details={'reason': e.message}, severity='warning')
            raise LoginRejectedError(e.message) from e

        logger.info(f"Customer authenticated: {email}")
        return session

    async def current_session(self):
        """Session the provider already holds, if any"""
        return await self.credentials.current_session()

"""
Login Form
"""

import logging
from typing import Callable, Optional

from stockroom.models.account import Session
from stockroom.models.errors import LoginError
from stockroom.services.auth_service import AuthService

logger = logging.getLogger(__name__)

DASHBOARD_PATH = "/dashboard"
LOGIN_SUCCESS_MESSAGE = "Logged in successfully"


class LoginForm:
    """State of one login form instance"""

    def __init__(self, auth_service: AuthService, navigate: Callable[[str], None]):
        self.auth_service = auth_service
        self.navigate = navigate
        self.error = ""
        self.success = ""
        self.loading = False

    async def submit(self, email: str, password: str) -> Optional[Session]:
        if self.loading:
            logger.warning("Ignoring login submission while another is in progress")
            return None

        self.error = ""
        self.success = ""
        self.loading = True
        try:
            session = await self.auth_service.login(email, password)
        except LoginError as e:
            self.error = e.message
            return None
        finally:
            self.loading = False

        self.success = LOGIN_SUCCESS_MESSAGE
        self.navigate(DASHBOARD_PATH)
        return session

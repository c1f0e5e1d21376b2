"""
Supabase Client Configuration
Credential provider wrapper for customer sign-up, sign-in and session lookup
"""

from supabase import acreate_client, AsyncClient, AuthError
from typing import Optional
import httpx
import logging

from stockroom.models.account import AccountIdentity, Session
from stockroom.models.errors import ProviderError

logger = logging.getLogger(__name__)


class SupabaseClient:
    """
    Owns the async Supabase connection.

    Lifecycle:
        - Call start() during app startup (FastAPI lifespan)
        - Call stop() during app shutdown
    """

    def __init__(self, url: str, key: str):
        self.url = url
        self.key = key
        self.client: Optional[AsyncClient] = None

    async def start(self):
        """Create the async client when credentials are present"""
        if self.client is not None:
            logger.warning("SupabaseClient already started")
            return

        if not (self.url and self.key):
            logger.warning("Supabase credentials not found in environment")
            return

        try:
            self.client = await acreate_client(self.url, self.key)
            logger.info("Supabase client initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize Supabase client: {e}")
            self.client = None

    async def stop(self):
        """Release the client reference"""
        self.client = None
        logger.info("Supabase client released")

    def get_client(self) -> Optional[AsyncClient]:
        """Get Supabase client instance"""
        return self.client

    def is_available(self) -> bool:
        """Check if Supabase is available and configured"""
        return self.client is not None


def _session_from_response(session) -> Session:
    user = getattr(session, 'user', None)
    return Session(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_at=session.expires_at,
        user_id=user.id if user else None,
        email=user.email if user else None
    )


class CredentialProviderClient:
    """Thin adapter over the hosted auth service"""

    def __init__(self, client: AsyncClient):
        self.client = client

    async def sign_up(self, email: str, password: str) -> AccountIdentity:
        """
        Create a provider account

        Args:
            email: Customer email
            password: Customer password

        Returns:
            AccountIdentity: Provider-assigned identity

        Raises:
            ProviderError: Duplicate email, weak password or transport failure
        """
        try:
            response = await self.client.auth.sign_up({
                "email": email,
                "password": password
            })
        except AuthError as e:
            logger.error(f"Supabase sign up error for {email}: {e.message}")
            raise ProviderError(e.message, status=getattr(e, 'status', None)) from e
        except httpx.HTTPError as e:
            logger.error(f"Supabase sign up transport error for {email}: {e}")
            raise ProviderError("Unable to reach the authentication service") from e

        if not response.user:
            logger.error(f"Sign up returned no user for {email}")
            raise ProviderError("Failed to create account")

        # Confirmation-enabled projects answer a repeat sign-up with an obfuscated
        # user that carries no identities instead of an error
        if response.user.identities == []:
            logger.warning(f"Sign up for already registered email: {email}")
            raise ProviderError("User already registered")

        logger.info(f"Customer signed up successfully: {email}")
        return AccountIdentity(user_id=response.user.id, email=response.user.email or email)

    async def sign_in(self, email: str, password: str) -> Session:
        """
        Sign in with email and password

        Args:
            email: Customer email
            password: Customer password

        Returns:
            Session: Session established by the provider

        Raises:
            ProviderError: Bad credentials or transport failure
        """
        try:
            response = await self.client.auth.sign_in_with_password({
                "email": email,
                "password": password
            })
        except AuthError as e:
            logger.error(f"Supabase sign in error for {email}: {e.message}")
            raise ProviderError(e.message, status=getattr(e, 'status', None)) from e
        except httpx.HTTPError as e:
            logger.error(f"Supabase sign in transport error for {email}: {e}")
            raise ProviderError("Unable to reach the authentication service") from e

        if not (response.user and response.session):
            logger.error(f"Failed to sign in customer: {email}")
            raise ProviderError("Invalid credentials")

        logger.info(f"Customer signed in successfully: {email}")
        return _session_from_response(response.session)

    async def current_session(self) -> Optional[Session]:
        """Return whatever session the provider already holds"""
        try:
            session = await self.client.auth.get_session()
        except (AuthError, httpx.HTTPError) as e:
            logger.warning(f"Session lookup failed: {e}")
            return None

        if not session:
            return None
        return _session_from_response(session)

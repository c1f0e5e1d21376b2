"""
FastAPI Dependencies
Provider-backed services built from clients created at application startup
"""

from fastapi import Depends, HTTPException, Request, status
from typing import Annotated
import logging

from stockroom.services.auth_service import AuthService
from stockroom.services.provisioning_service import ProvisioningService
from stockroom.utils.config import get_supabase_config
from stockroom.utils.profile_store import ProfileStoreClient
from stockroom.utils.supabase_client import CredentialProviderClient, SupabaseClient

logger = logging.getLogger(__name__)


def get_supabase(request: Request) -> SupabaseClient:
    """Supabase connection owned by the application lifespan"""
    supabase = getattr(request.app.state, 'supabase', None)
    if supabase is None or not supabase.is_available():
        logger.error("Authentication provider requested but not configured")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication provider is not configured"
        )
    return supabase


def get_credential_client(supabase: SupabaseClient = Depends(get_supabase)) -> CredentialProviderClient:
    return CredentialProviderClient(supabase.get_client())


def get_profile_store(supabase: SupabaseClient = Depends(get_supabase)) -> ProfileStoreClient:
    return ProfileStoreClient(supabase.get_client(), get_supabase_config().profile_table)


def get_provisioning_service(
    credentials: CredentialProviderClient = Depends(get_credential_client),
    profiles: ProfileStoreClient = Depends(get_profile_store)
) -> ProvisioningService:
    """A fresh orchestrator per submission; single flight is held by each form instance"""
    return ProvisioningService(credentials, profiles)


def get_auth_service(credentials: CredentialProviderClient = Depends(get_credential_client)) -> AuthService:
    return AuthService(credentials)


# Type aliases for dependency injection
ProvisioningDep = Annotated[ProvisioningService, Depends(get_provisioning_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
ProfileStoreDep = Annotated[ProfileStoreClient, Depends(get_profile_store)]

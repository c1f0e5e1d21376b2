"""
Authentication Routes
Customer signup, login, session lookup and username availability
"""

from fastapi import APIRouter, HTTPException, status, Query
from fastapi.responses import JSONResponse
import logging

from stockroom.forms.signup import (
    describe_outcome, LOGIN_PATH, REDIRECT_DELAY_SECONDS
)
from stockroom.models.errors import (
    ValidationFailed, MissingFieldError,
    LoginRejectedError, StoreError
)
from stockroom.models.provisioning import ProvisioningSuccess, AccountCreatedProfileFailed
from stockroom.schemas.auth import (
    RegistrationRequest, LoginRequest, AccountResponseSchema,
    SessionResponseSchema, UsernameAvailabilitySchema
)
from stockroom.utils.dependencies import ProvisioningDep, AuthServiceDep, ProfileStoreDep

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signup", response_model=dict, status_code=status.HTTP_201_CREATED)
async def signup_customer(
    registration: RegistrationRequest,
    provisioning: ProvisioningDep
):
    """
    Register new customer

    Creates the provider account, then the profile record. An account whose
    profile could not be saved is reported with 424 and is not rolled back.
    """
    outcome = await provisioning.run(registration)

    message = describe_outcome(outcome)

    if isinstance(outcome, ProvisioningSuccess):
        logger.info(f"Customer registered successfully: {outcome.identity.email}")
        return {
            "success": True,
            "message": message,
            "user": AccountResponseSchema(
                id=outcome.identity.user_id,
                email=outcome.identity.email
            ).model_dump(),
            "redirect_to": LOGIN_PATH,
            "redirect_after": REDIRECT_DELAY_SECONDS
        }

    if isinstance(outcome, AccountCreatedProfileFailed):
        partial = outcome.as_error()
        logger.error(f"Partial provisioning: {partial.message}")
        return JSONResponse(
            status_code=status.HTTP_424_FAILED_DEPENDENCY,
            content={
                "success": False,
                "partial": True,
                "message": message,
                "user": AccountResponseSchema(
                    id=outcome.identity.user_id,
                    email=outcome.identity.email
                ).model_dump()
            }
        )

    if isinstance(outcome.error, ValidationFailed):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "success": False,
                "message": message,
                "errors": outcome.error.errors
            }
        )

    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


@router.post("/login", response_model=dict)
async def login_customer(
    login_data: LoginRequest,
    auth_service: AuthServiceDep
):
    """
    Customer login

    Authenticates customer with the credential provider and returns its session tokens
    """
    try:
        session = await auth_service.login(login_data.email, login_data.password)
    except MissingFieldError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except LoginRejectedError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)

    logger.info(f"Customer logged in successfully: {login_data.email}")

    return {
        "success": True,
        "message": "Logged in successfully",
        "user": {"id": session.user_id, "email": session.email},
        "tokens": SessionResponseSchema(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_at=session.expires_at
        ).model_dump()
    }


@router.get("/session", response_model=dict)
async def current_session(auth_service: AuthServiceDep):
    """
    Current provider session

    Diagnostic lookup; returns null when no session is held
    """
    session = await auth_service.current_session()
    if session is None:
        return {"authenticated": False, "session": None}

    return {
        "authenticated": not session.is_expired(),
        "session": {
            "user_id": session.user_id,
            "email": session.email,
            "expires_at": session.expires_at
        }
    }


@router.get("/username-availability", response_model=UsernameAvailabilitySchema)
async def username_availability(
    profiles: ProfileStoreDep,
    username: str = Query(..., min_length=1, max_length=64)
):
    """
    Check whether a username is free

    Advisory only; the profile insert is the final word on uniqueness
    """
    username = username.strip()
    if not username:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username is required")

    try:
        available = await profiles.is_username_available(username)
    except StoreError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message)

    return UsernameAvailabilitySchema(username=username, available=available)

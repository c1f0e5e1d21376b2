"""
Shared data schemas for Stockroom

This package contains the request and response schemas used by the API.
"""

from .auth import (
    UserRole, RegistrationRequest, LoginRequest, AccountResponseSchema,
    SessionResponseSchema, UsernameAvailabilitySchema
)

__all__ = [
    "UserRole",
    "RegistrationRequest",
    "LoginRequest",
    "AccountResponseSchema",
    "SessionResponseSchema",
    "UsernameAvailabilitySchema",
]

"""
Authentication data schemas for Stockroom

Pydantic models for signup and login form submissions and API responses.
Form schemas accept incomplete input; field rules live in the validation
service so that every violation is reported at once.
"""

from typing import Optional, Dict, Any
from pydantic import BaseModel, Field, field_validator
from enum import Enum


class UserRole(str, Enum):
    """Profile role enumeration"""
    OWNER = "owner"
    STAFF = "staff"


class RegistrationRequest(BaseModel):
    """Schema for the signup form"""
    email: str = ""
    password: str = ""
    confirm_password: str = ""
    full_name: str = ""
    business_name: str = ""
    username: str = ""
    phone: Optional[str] = None
    role: str = ""
    terms_accepted: bool = False

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        """Normalize email casing"""
        return v.strip().lower()

    @field_validator('phone')
    @classmethod
    def blank_phone_to_none(cls, v):
        """Treat an empty phone field as not provided"""
        if v is not None and not v.strip():
            return None
        return v

    def profile_fields(self) -> Dict[str, Any]:
        """Fields copied into the profile record"""
        return {
            'username': self.username.strip(),
            'phone': self.phone.strip() if self.phone else None,
            'role': self.role.strip().lower(),
            'full_name': self.full_name.strip(),
            'business_name': self.business_name.strip()
        }


class LoginRequest(BaseModel):
    """Schema for the login form"""
    email: str = ""
    password: str = ""

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        """Normalize email casing"""
        return v.strip().lower()


class AccountResponseSchema(BaseModel):
    """Account information returned after signup"""
    id: str
    email: str


class SessionResponseSchema(BaseModel):
    """Session tokens returned after login"""
    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None
    token_type: str = "bearer"


class UsernameAvailabilitySchema(BaseModel):
    """Username availability lookup response"""
    username: str = Field(..., min_length=1)
    available: bool

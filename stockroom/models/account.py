"""
Account Models
Identity, session and profile entities produced by the provisioning flow
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone
from dataclasses import dataclass


@dataclass(frozen=True)
class AccountIdentity:
    """Account created by the credential provider"""
    user_id: str
    email: str


@dataclass(frozen=True)
class Session:
    """Authenticated session issued by the credential provider"""
    access_token: str
    refresh_token: Optional[str]
    expires_at: Optional[int]
    user_id: Optional[str] = None
    email: Optional[str] = None

    def is_expired(self) -> bool:
        """Check if session is expired"""
        if self.expires_at is None:
            return False
        return datetime.now(timezone.utc).timestamp() > self.expires_at


@dataclass(frozen=True)
class ProfileRecord:
    """Profile row keyed by the provider's user id"""
    user_id: str
    username: str
    role: str
    full_name: str
    business_name: str
    phone: Optional[str] = None

    def to_row(self) -> Dict[str, Any]:
        """Row shape stored in the profile table"""
        return {
            'user_id': self.user_id,
            'username': self.username,
            'phone': self.phone,
            'role': self.role,
            'full_name': self.full_name,
            'business_name': self.business_name
        }


@dataclass(frozen=True)
class UsernameAvailability:
    """Result of an advisory username lookup; available is None when the lookup failed"""
    username: str
    available: Optional[bool]
    error: Optional[str] = None

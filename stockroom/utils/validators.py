"""
Validation utilities for signup and login forms

Every rule runs independently so a single pass reports all violated fields.
Nothing here touches the network.
"""

import re
from typing import Dict, Optional

from stockroom.schemas.auth import RegistrationRequest, UserRole


EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
PHONE_PATTERN = re.compile(r'^\+?[\d\s-]+$')

MIN_PASSWORD_LENGTH = 8
MIN_PHONE_DIGITS = 10

REQUIRED_TEXT_FIELDS = {
    'full_name': 'Full name is required',
    'business_name': 'Business name is required',
    'username': 'Username is required',
}


def validate_email(email: str) -> Optional[str]:
    """Return an error message for an invalid email, None otherwise"""
    if not email or not email.strip():
        return 'Email is required'
    if not EMAIL_PATTERN.match(email.strip()):
        return 'Enter a valid email address'
    return None


def validate_password(password: str) -> Optional[str]:
    """Check the minimum password strength policy"""
    if not password:
        return 'Password is required'
    if len(password) < MIN_PASSWORD_LENGTH:
        return f'Password must be at least {MIN_PASSWORD_LENGTH} characters long'

    has_upper = any(c.isupper() for c in password)
    has_lower = any(c.islower() for c in password)
    has_digit = any(c.isdigit() for c in password)

    if not all([has_upper, has_lower, has_digit]):
        return 'Password must contain uppercase, lowercase and a digit'
    return None


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """Phone is optional; when given it needs 10+ digits"""
    if phone is None or not phone.strip():
        return None
    phone = phone.strip()
    digits = sum(1 for c in phone if c.isdigit())
    if not PHONE_PATTERN.match(phone) or digits < MIN_PHONE_DIGITS:
        return 'Enter a valid phone number (at least 10 digits)'
    return None


def validate_role(role: str) -> Optional[str]:
    if not role or not role.strip():
        return 'Role is required'
    if role.strip().lower() not in {r.value for r in UserRole}:
        return 'Role must be owner or staff'
    return None


def validate_registration(request: RegistrationRequest) -> Dict[str, str]:
    """
    Validate a signup submission

    Args:
        request: Signup form data

    Returns:
        dict: Field name to error message, empty when the request is valid
    """
    errors = {}

    email_error = validate_email(request.email)
    if email_error:
        errors['email'] = email_error

    password_error = validate_password(request.password)
    if password_error:
        errors['password'] = password_error

    if request.confirm_password != request.password:
        errors['confirm_password'] = 'Passwords do not match'

    phone_error = validate_phone(request.phone)
    if phone_error:
        errors['phone'] = phone_error

    for field, message in REQUIRED_TEXT_FIELDS.items():
        value = getattr(request, field)
        if not value or not value.strip():
            errors[field] = message

    role_error = validate_role(request.role)
    if role_error:
        errors['role'] = role_error

    if request.terms_accepted is not True:
        errors['terms_accepted'] = 'Terms and conditions must be accepted'

    return errors


def validate_login(email: str, password: str) -> Dict[str, str]:
    """Login only requires both fields to be filled in"""
    errors = {}
    if not email or not email.strip():
        errors['email'] = 'Email is required'
    if not password:
        errors['password'] = 'Password is required'
    return errors

from .signup import SignupForm, describe_outcome
from .login import LoginForm

__all__ = ["SignupForm", "LoginForm", "describe_outcome"]

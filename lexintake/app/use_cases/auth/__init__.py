"""
Authentication Use Cases

Sign-up, sign-in, sign-out and session resolution.
"""

from .dtos import SessionContext, SigninResponse, SignupCommand, SignupResponse
from .resolve_session_use_case import ResolveSessionUseCase
from .signin_use_case import SigninUseCase
from .signout_use_case import SignoutUseCase
from .signup_use_case import SignupUseCase

__all__ = [
    # Use Cases
    "SignupUseCase",
    "SigninUseCase",
    "SignoutUseCase",
    "ResolveSessionUseCase",
    # DTOs
    "SignupCommand",
    "SignupResponse",
    "SigninResponse",
    "SessionContext",
]

"""
Security Module.

Token verification used by the default request authorizer.
"""

from .auth import CognitoVerifier, TokenExpiredError, UserClaims, VerifierChain, extract_bearer_token

__all__ = [
    "CognitoVerifier",
    "TokenExpiredError",
    "UserClaims",
    "VerifierChain",
    "extract_bearer_token",
]

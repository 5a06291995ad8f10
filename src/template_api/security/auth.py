"""
Cognito token verification for the default request authorizer.

Tokens are JWTs issued by one of the configured Cognito user pools. A token is
accepted when its RS256 signature matches a key in the pool's JSON Web Key
Set, it is unexpired, its issuer is the pool, its token_use matches the
verifier and it was issued to the verifier's app client (the aud claim for id
tokens, the client_id claim for access tokens).
"""

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

import jwt
from aws_lambda_powertools import Logger
from jwt import PyJWKClient
from jwt.exceptions import ExpiredSignatureError, PyJWTError

from template_api.exceptions import AuthenticationError, InvalidTokenError
from template_api.models.verifier import Verifier

logger = Logger()

ALGORITHMS = ['RS256']
JWKS_CACHE_SECONDS = 3600


class TokenExpiredError(InvalidTokenError):
    """Token has expired."""
    pass


@dataclass
class UserClaims:
    """Claims of a verified token."""

    sub: str
    verifier: str
    token_use: str
    client_id: str
    username: Optional[str] = None
    groups: List[str] = field(default_factory=list)
    expires_at: Optional[datetime] = None

    def authorizer_context(self) -> Dict[str, str]:
        """Flat string context forwarded by API Gateway to the integration."""
        context = {
            'verifier': self.verifier,
            'tokenUse': self.token_use,
            'clientId': self.client_id,
            'sub': self.sub,
        }
        if self.username:
            context['username'] = self.username
        return context


class CognitoVerifier:
    """Verifies tokens for a single Cognito user pool and app client."""

    def __init__(self, verifier: Verifier, leeway: int = 10, jwks_client: Optional[PyJWKClient] = None):
        """
        Initialize the verifier.

        Args:
            verifier: Accepted user pool, client and token use
            leeway: Clock skew tolerance in seconds
            jwks_client: JWKS client; defaults to one bound to the pool's JWKS URL
        """
        self.verifier = verifier
        self.leeway = leeway
        self.jwks_client = jwks_client or PyJWKClient(
            verifier.jwks_url,
            cache_keys=True,
            lifespan=JWKS_CACHE_SECONDS,
        )

    def verify(self, token: str) -> UserClaims:
        """
        Verify a token and return its claims.

        Raises:
            TokenExpiredError: token is past its exp claim
            InvalidTokenError: signature, issuer, audience, token use or client mismatch
        """
        verifier = self.verifier
        expects_id_token = verifier.token_use == 'id'

        try:
            signing_key = self.jwks_client.get_signing_key_from_jwt(token)
            payload = jwt.decode(
                token,
                signing_key.key,
                algorithms=ALGORITHMS,
                issuer=verifier.issuer,
                audience=verifier.client_id if expects_id_token else None,
                leeway=self.leeway,
                options={
                    'require': ['exp', 'iss', 'sub', 'token_use'],
                    'verify_aud': expects_id_token,
                },
            )
        except ExpiredSignatureError as exc:
            raise TokenExpiredError('Token has expired') from exc
        except PyJWTError as exc:
            raise InvalidTokenError(f'Invalid token: {exc}') from exc

        if payload.get('token_use') != verifier.token_use:
            raise InvalidTokenError(
                f'Token use {payload.get("token_use")!r} does not match expected {verifier.token_use!r}'
            )

        if not expects_id_token and payload.get('client_id') != verifier.client_id:
            raise InvalidTokenError('Token was not issued to the expected client')

        return self._extract_user_claims(payload)

    def _extract_user_claims(self, payload: Mapping[str, Any]) -> UserClaims:
        expires_at = None
        if 'exp' in payload:
            expires_at = datetime.fromtimestamp(payload['exp'], tz=timezone.utc)

        return UserClaims(
            sub=payload['sub'],
            verifier=self.verifier.name,
            token_use=payload['token_use'],
            client_id=self.verifier.client_id,
            username=payload.get('cognito:username') or payload.get('username'),
            groups=list(payload.get('cognito:groups', [])),
            expires_at=expires_at,
        )


class VerifierChain:
    """Accepts a token when any configured verifier accepts it."""

    def __init__(self, verifiers: Sequence[Verifier]):
        self.verifiers = [CognitoVerifier(verifier) for verifier in verifiers]

    def verify(self, token: str) -> UserClaims:
        """
        Verify token against each verifier in order.

        Raises:
            AuthenticationError: no verifiers are configured
            InvalidTokenError: every verifier rejected the token
        """
        if not self.verifiers:
            raise AuthenticationError('No verifiers configured')

        start_time = time.time()
        failures = []
        for cognito_verifier in self.verifiers:
            try:
                claims = cognito_verifier.verify(token)
            except InvalidTokenError as exc:
                failures.append(f'{cognito_verifier.verifier.name}: {exc}')
                continue

            logger.info(
                "Token verified",
                extra={
                    "verifier": claims.verifier,
                    "sub": claims.sub,
                    "duration_ms": (time.time() - start_time) * 1000,
                },
            )
            return claims

        raise InvalidTokenError('; '.join(failures))


def extract_bearer_token(headers: Optional[Mapping[str, str]]) -> Optional[str]:
    """Extract the token from an Authorization header, with or without a Bearer prefix."""
    normalized = {key.lower(): value for key, value in (headers or {}).items()}
    auth_header = (normalized.get('authorization') or '').strip()
    if not auth_header:
        return None

    scheme, _, credentials = auth_header.partition(' ')
    if scheme.lower() == 'bearer':
        return credentials.strip() or None
    return auth_header

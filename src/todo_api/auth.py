from __future__ import annotations

from typing import Any, Dict, Optional

import jwt
import structlog
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .settings import Settings

log = structlog.get_logger(__name__)

_security = HTTPBearer(auto_error=False)

ALGORITHMS = ["RS256"]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def jwks_url(domain: str) -> str:
    """Return the JWKS endpoint published by an Auth0-style identity provider."""
    return f"https://{domain}/.well-known/jwks.json"


def issuer_for(domain: str) -> str:
    return f"https://{domain}/"


# PUBLIC_INTERFACE
def get_auth_dependency(settings: Settings, jwks_client: Optional[Any] = None):
    """
    Return a FastAPI dependency callable that enforces bearer-token validation
    only when ENABLE_AUTH is set. When disabled, the dependency is a no-op.

    Behavior:
    - If settings.enable_auth is False (default): returns a dependency that does nothing.
    - If True: the token's signing key is looked up by 'kid' in the identity
      provider's JWKS, then signature, expiry, audience and issuer are checked.
      Missing or invalid tokens raise 401 with WWW-Authenticate: Bearer.

    jwks_client may be any object exposing get_signing_key_from_jwt(token);
    it defaults to a caching jwt.PyJWKClient for AUTH0_DOMAIN.

    Usage:
        auth_dep = get_auth_dependency(settings)
        app.include_router(router, dependencies=[Depends(auth_dep)])
    """
    if not settings.enable_auth:
        async def _noop() -> None:  # noqa: D401 - trivial
            """No-op dependency (auth disabled)."""
            return None

        return _noop

    domain = settings.auth0_domain
    audience = settings.auth0_api_audience
    if jwks_client is None and domain:
        jwks_client = jwt.PyJWKClient(jwks_url(domain))

    def _enforce(creds: Optional[HTTPAuthorizationCredentials] = Depends(_security)) -> Dict[str, Any]:
        """
        Enforce bearer-token authentication when enabled.

        Returns:
            The verified token claims.

        Raises:
            HTTPException(401) if the token is missing or invalid.
        """
        if creds is None or not creds.credentials:
            log.warning("rejected token", reason="missing")
            raise _unauthorized("Not authenticated")

        if domain is None or audience is None or jwks_client is None:
            # Misconfiguration: auth enabled but identity provider not provided
            log.warning("auth enabled without identity provider settings")
            raise _unauthorized("Server authentication not configured")

        token = creds.credentials
        try:
            signing_key = jwks_client.get_signing_key_from_jwt(token)
            return jwt.decode(
                token,
                signing_key.key,
                algorithms=ALGORITHMS,
                audience=audience,
                issuer=issuer_for(domain),
            )
        except jwt.ExpiredSignatureError:
            log.warning("rejected token", reason="expired")
            raise _unauthorized("Token has expired")
        except jwt.PyJWTError as exc:
            log.warning("rejected token", reason=type(exc).__name__)
            raise _unauthorized("Invalid authentication credentials")

    return _enforce

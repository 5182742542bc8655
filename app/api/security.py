"""OAuth2 security for the catalog API.

Declares the implicit-flow scheme shown in Swagger and validates bearer
tokens by introspecting them at the identity provider.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Annotated, Any

import httpx
import structlog
from fastapi import Depends, HTTPException, Security, status
from fastapi.openapi.models import OAuthFlowImplicit, OAuthFlows
from fastapi.security import OAuth2, SecurityScopes
from fastapi.security.utils import get_authorization_scheme_param

from app.infrastructure.config import settings

logger = structlog.get_logger()

CATALOG_SCOPE = "catalog"
CATALOG_BFF_SCOPE = "catalog.bff"

SCOPES = {
    CATALOG_SCOPE: "catalog",
    CATALOG_BFF_SCOPE: "catalog.bff",
}

oauth2_scheme = OAuth2(
    flows=OAuthFlows(
        implicit=OAuthFlowImplicit(
            authorizationUrl=f"{settings.authorization.authority}/connect/authorize",
            tokenUrl=f"{settings.authorization.authority}/connect/token",
            scopes=SCOPES,
        )
    ),
    scheme_name="oauth2",
    auto_error=False,
)


@dataclass
class Principal:
    """Caller resolved from an access token."""

    subject: str | None
    client_id: str | None
    scopes: set[str] = field(default_factory=set)


class TokenIntrospectionError(Exception):
    """Raised when the identity provider cannot be reached."""


class TokenValidator:
    """Validates access tokens through the authority's introspection endpoint.

    Example usage:
        validator = TokenValidator("https://identity.example.com", "catalog", "secret")
        principal = await validator.validate(token)
    """

    def __init__(
        self,
        authority: str,
        client_id: str,
        client_secret: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.introspection_url = f"{authority.rstrip('/')}/connect/introspect"
        self.client_id = client_id
        self.client_secret = client_secret
        self.timeout = timeout
        self.transport = transport

    async def validate(self, token: str) -> Principal | None:
        """Introspect a token.

        Args:
            token: Raw bearer token.

        Returns:
            Principal for an active token, None for an inactive one.

        Raises:
            TokenIntrospectionError: On transport errors or non-200 replies.
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.introspection_url,
                    data={"token": token},
                    auth=(self.client_id, self.client_secret),
                )
        except httpx.HTTPError as e:
            raise TokenIntrospectionError(str(e)) from e

        if response.status_code != status.HTTP_200_OK:
            raise TokenIntrospectionError(
                f"Introspection failed with status {response.status_code}"
            )

        return self.principal_from_claims(response.json())

    @staticmethod
    def principal_from_claims(claims: dict[str, Any]) -> Principal | None:
        """Build a principal from introspection claims."""
        if not claims.get("active"):
            return None

        raw_scopes = claims.get("scope") or []
        if isinstance(raw_scopes, str):
            raw_scopes = raw_scopes.split()

        return Principal(
            subject=claims.get("sub"),
            client_id=claims.get("client_id"),
            scopes=set(raw_scopes),
        )


@lru_cache
def get_token_validator() -> TokenValidator:
    """Get the token validator configured from settings."""
    return TokenValidator(
        authority=settings.authorization.authority,
        client_id=settings.authorization.client_id,
        client_secret=settings.authorization.client_secret,
    )


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error_code": "UNAUTHORIZED", "message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_principal(
    security_scopes: SecurityScopes,
    authorization: Annotated[str | None, Depends(oauth2_scheme)],
    validator: Annotated[TokenValidator, Depends(get_token_validator)],
) -> Principal | None:
    """Resolve the caller and enforce the scopes the route requires.

    Returns None when authorization is disabled in settings.

    Raises:
        HTTPException: 401 for a missing or inactive token, 403 when a
            required scope is missing, 503 when introspection fails.
    """
    if not settings.authorization.enabled:
        return None

    scheme, token = get_authorization_scheme_param(authorization)
    if not authorization or scheme.lower() != "bearer" or not token:
        raise _unauthorized("Missing bearer token")

    try:
        principal = await validator.validate(token)
    except TokenIntrospectionError as e:
        logger.error("Token introspection failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "error_code": "AUTHORITY_UNAVAILABLE",
                "message": "Unable to validate the access token",
            },
        ) from e

    if principal is None:
        raise _unauthorized("Invalid or expired access token")

    missing = [scope for scope in security_scopes.scopes if scope not in principal.scopes]
    if missing:
        logger.warning("Missing token scope", required=missing, subject=principal.subject)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "error_code": "FORBIDDEN",
                "message": f"Token lacks required scope: {', '.join(missing)}",
            },
        )

    return principal


# Route dependencies: reads need the BFF scope, writes the catalog scope
require_catalog_bff = Security(get_principal, scopes=[CATALOG_BFF_SCOPE])
require_catalog = Security(get_principal, scopes=[CATALOG_SCOPE])

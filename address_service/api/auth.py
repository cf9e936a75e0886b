"""Bearer token authentication for protected procedures."""

import hmac
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from address_service.config.logging import LoggingService
from address_service.config.settings import settings

logging_service = LoggingService(__name__)

security = HTTPBearer(auto_error=False)


def is_authenticated(token: Optional[str]) -> bool:
    """Check a presented token against the configured API tokens."""
    if not token:
        return False
    presented = token.encode("utf-8")
    return any(
        hmac.compare_digest(presented, accepted.encode("utf-8"))
        for accepted in settings.api_token_list
    )


def require_authenticated_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> None:
    """Dependency rejecting callers without a valid bearer token."""
    if credentials is None:
        logging_service.log_operation(
            "warning",
            "Missing bearer token on protected procedure",
            operation="authenticate"
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not is_authenticated(credentials.credentials):
        logging_service.log_operation(
            "warning",
            "Rejected unknown bearer token",
            operation="authenticate"
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

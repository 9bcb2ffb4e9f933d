"""FastAPI dependencies: get_current_team / require_admin / require_collaborator.

Usage in any protected router:
    from src.cc_gateway.auth.dependencies import get_current_team

    @router.get("/protected")
    async def protected(team: TeamPrincipal = Depends(get_current_team)):
        ...

The engine trusts the resolved identity; no credential checks happen past
this point.
"""

from dataclasses import dataclass

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from src.cc_common.errors import (
    AdminRequiredError,
    CollaboratorRequiredError,
    InvalidCredentialsError,
)
from src.cc_gateway.auth.jwt_handler import decode_access_token

# tokenUrl points at the external auth service (used for the Swagger "Authorize" button)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")

# Reusable 401 exception with WWW-Authenticate header (OAuth2 standard)
_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)


@dataclass(frozen=True)
class TeamPrincipal:
    team_id: str
    is_admin: bool = False
    is_service: bool = False


async def get_current_team(token: str = Depends(oauth2_scheme)) -> TeamPrincipal:
    """Extract and validate the JWT Bearer token.

    Raises HTTP 401 if the token is missing, invalid, or expired.
    """
    try:
        payload = decode_access_token(token)
    except InvalidCredentialsError:
        raise _CREDENTIALS_EXCEPTION from None
    return TeamPrincipal(
        team_id=str(payload["sub"]),
        is_admin=bool(payload.get("is_admin", False)),
        is_service=bool(payload.get("is_service", False)),
    )


async def require_admin(
    current_team: TeamPrincipal = Depends(get_current_team),
) -> TeamPrincipal:
    """Raises HTTP 403 (AdminRequiredError) unless the caller is the admin session."""
    if not current_team.is_admin:
        raise AdminRequiredError()
    return current_team


async def require_collaborator(
    current_team: TeamPrincipal = Depends(get_current_team),
) -> TeamPrincipal:
    """Rewards and penalties are granted by the quiz and mini-game services
    (or the admin), never by the team that receives them."""
    if not (current_team.is_service or current_team.is_admin):
        raise CollaboratorRequiredError()
    return current_team

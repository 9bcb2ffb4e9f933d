"""JWT access-token verification.

Tokens are issued by the external auth service; this module only verifies
them. HS256 with a shared JWT_SECRET.

Claims used:
  sub       team id
  type      must be "access"
  is_admin  bool, optional (default False)
  is_service  bool, optional (default False): quiz and mini-game backends
"""

from typing import Any

from jose import JWTError, jwt

from config.settings import settings
from src.cc_common.errors import InvalidCredentialsError

_ALGORITHM = settings.JWT_ALGORITHM  # "HS256"


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode and validate an access token.

    Raises:
        InvalidCredentialsError: signature/expiry invalid, wrong token type,
                                 or missing subject.
    """
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],  # Explicit list prevents algorithm confusion
        )
    except JWTError:
        raise InvalidCredentialsError() from None

    if payload.get("type") != "access" or not payload.get("sub"):
        raise InvalidCredentialsError()
    return payload

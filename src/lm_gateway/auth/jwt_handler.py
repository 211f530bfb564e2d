"""Access-token verification.

Tokens are issued by the external auth provider (HS256, shared JWT_SECRET,
audience "authenticated"); this service only verifies them. There is no
token issuing, refresh or revocation here.
"""

from jose import JWTError, jwt

from config.settings import settings
from src.lm_common.errors import InvalidCredentialsError

_ALGORITHM = settings.JWT_ALGORITHM  # "HS256"


def decode_access_token(token: str) -> dict[str, object]:
    """Decode and validate a bearer token.

    Returns:
        Decoded claims; at minimum {"sub": <user id>}.

    Raises:
        InvalidCredentialsError: bad signature, wrong audience, expired, or no sub.
    """
    try:
        payload: dict[str, object] = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],  # Explicit list prevents algorithm confusion
            audience=settings.JWT_AUDIENCE,
        )
    except JWTError:
        raise InvalidCredentialsError() from None

    if not payload.get("sub"):
        raise InvalidCredentialsError()
    return payload

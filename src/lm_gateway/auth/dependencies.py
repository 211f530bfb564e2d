"""FastAPI dependencies: get_current_user, get_optional_user.

Usage in any protected router:
    from src.lm_gateway.auth.dependencies import CurrentUser, get_current_user

    @router.get("/protected")
    async def protected(user: Annotated[CurrentUser, Depends(get_current_user)]):
        ...
"""

from dataclasses import dataclass

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from src.lm_common.errors import InvalidCredentialsError
from src.lm_gateway.auth.jwt_handler import decode_access_token

# Tokens come from the auth provider; tokenUrl only feeds the Swagger "Authorize" button
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/v1/token")
_optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/v1/token", auto_error=False)

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)


@dataclass(frozen=True)
class CurrentUser:
    id: str
    email: str | None = None


async def get_current_user(token: str = Depends(oauth2_scheme)) -> CurrentUser:
    """Validate the Bearer token and return the caller's identity.

    Raises HTTP 401 if the token is missing, invalid, or expired.
    """
    try:
        payload = decode_access_token(token)
    except InvalidCredentialsError:
        raise _CREDENTIALS_EXCEPTION from None

    email = payload.get("email")
    return CurrentUser(id=str(payload["sub"]), email=str(email) if email else None)


async def get_optional_user(
    token: str | None = Depends(_optional_oauth2_scheme),
) -> CurrentUser | None:
    """Like get_current_user, but anonymous callers get None.

    A token that is present but invalid is still a 401.
    """
    if token is None:
        return None
    return await get_current_user(token)

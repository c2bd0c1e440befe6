from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from noteapp.features.auth.models.token import TokenData
from noteapp.features.auth.utils.security import decode_access_token
from noteapp.platform.exceptions import InvalidToken, Unauthenticated

# auto_error is off so a missing header becomes our 401 instead of HTTPBearer's 403
security = HTTPBearer(auto_error=False)


async def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> TokenData:
    """
    Dependency that gates protected routes on a valid bearer token.

    The token is self-contained, so this never touches the database. The
    resolved user id is also placed on ``request.state.user_id`` for
    downstream handlers.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()

    payload = decode_access_token(credentials.credentials)
    user_id = payload.get("sub")
    if not user_id:
        raise InvalidToken()

    identity = TokenData(
        user_id=str(user_id),
        email=payload.get("email"),
        exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )
    request.state.user_id = identity.user_id
    return identity

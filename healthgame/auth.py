from fastapi import HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import logging

from healthgame.services.auth_service import AuthService
from healthgame.exceptions import InvalidTokenException

logger = logging.getLogger("healthgame.auth")

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(bearer_scheme)
) -> int:
    """Resolve the caller's user id from the Authorization: Bearer token"""
    if not credentials or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return AuthService.decode_token(credentials.credentials)
    except InvalidTokenException as e:
        logger.warning(f"Rejected token: {e.reason}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

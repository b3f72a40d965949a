"""
Bearer token verification: bearer token -> stable user id.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..config import Settings

logger = logging.getLogger(__name__)

MOCK_TOKEN_PREFIX = "mock-id-token-for-"

bearer_scheme = HTTPBearer(auto_error=False)


class AuthenticationError(Exception):
    """Token is malformed, expired, or has no subject."""


class TokenVerifier:
    """Verifies HS256 access tokens, plus mock tokens when enabled."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        mock_auth_enabled: bool = False,
        expire_minutes: int = 60 * 24,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.mock_auth_enabled = mock_auth_enabled
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenVerifier":
        return cls(
            secret_key=settings.secret_key,
            algorithm=settings.algorithm,
            mock_auth_enabled=settings.mock_auth_enabled,
            expire_minutes=settings.access_token_expire_minutes,
        )

    def verify(self, token: str) -> str:
        """Return the user id carried by ``token``."""
        if self.mock_auth_enabled and token.startswith(MOCK_TOKEN_PREFIX):
            user_id = token[len(MOCK_TOKEN_PREFIX):]
            if not user_id:
                raise AuthenticationError("Invalid mock token")
            return user_id

        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.PyJWTError as e:
            raise AuthenticationError("Invalid or expired token") from e

        user_id = payload.get("sub")
        if not user_id:
            raise AuthenticationError("Token has no subject")
        return str(user_id)

    def create_access_token(self, user_id: str, expires_delta: Optional[timedelta] = None) -> str:
        expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=self.expire_minutes))
        return jwt.encode(
            {"sub": str(user_id), "exp": expire},
            self.secret_key,
            algorithm=self.algorithm,
        )


def get_token_verifier(request: Request) -> TokenVerifier:
    return request.app.state.token_verifier


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> str:
    """FastAPI dependency resolving the caller's user id."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization token required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return verifier.verify(credentials.credentials)
    except AuthenticationError as e:
        logger.warning(f"Rejected token {credentials.credentials[:10]}...: {e}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )

# app/services/token_service.py
import secrets
from datetime import datetime, timedelta, timezone

import jwt

from app.domain.errors import AuthError, ERROR_UNAUTHORIZED
from app.utils.logging import get_logger
from app.utils.settings import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    JWT_ALGORITHM,
    JWT_SECRET_KEY,
)

logger = get_logger(__name__)


class TokenService:
    """
    Wydaje i weryfikuje bearer tokeny (JWT).
    Claim sub = id uzytkownika, exp = wygasniecie.
    """

    def __init__(
        self,
        secret_key: str | None = None,
        algorithm: str = JWT_ALGORITHM,
        expire_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES,
    ):
        key = secret_key or JWT_SECRET_KEY
        if not key:
            logger.warning("JWT_SECRET_KEY not set, using a random per-process key")
            key = secrets.token_urlsafe(32)

        self.secret_key = key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, user_id: int) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            logger.warning("Rejected expired token")
            raise AuthError(ERROR_UNAUTHORIZED)
        except jwt.InvalidTokenError as e:
            logger.warning(f"Rejected invalid token: {e}")
            raise AuthError(ERROR_UNAUTHORIZED)

        try:
            return int(payload["sub"])
        except (TypeError, ValueError):
            logger.warning("Rejected token with malformed sub claim")
            raise AuthError(ERROR_UNAUTHORIZED)

"""Authentication service — JWT creation and verification.

Dev mode: HS256 with symmetric jwt_secret_key.
Production: RS256 with the configured public key.
"""

from __future__ import annotations

import time

import structlog
from jose import JWTError, jwt

from fanout.core.config import settings
from fanout.core.exceptions import UnauthorisedError
from fanout.core.schemas import SessionClaims

logger = structlog.get_logger()


class AuthService:
    def verify_token(self, token: str) -> SessionClaims:
        """Validate JWT signature, expiry, and required claims. Raises 401 on failure."""
        try:
            if settings.jwt_public_key:
                # Production: RS256 with the identity provider public key
                payload = jwt.decode(
                    token,
                    settings.jwt_public_key,
                    algorithms=["RS256"],
                    audience=settings.jwt_audience,
                )
            else:
                # Development: HS256 with symmetric secret
                payload = jwt.decode(
                    token,
                    settings.jwt_secret_key,
                    algorithms=[settings.jwt_algorithm],
                    options={"verify_aud": False, "verify_iss": False},
                )
        except JWTError as exc:
            logger.warning("auth_token_invalid", error=str(exc))
            raise UnauthorisedError("Invalid or expired token.") from exc

        sub = payload.get("sub")
        exp = payload.get("exp")

        if not all([sub, exp]):
            raise UnauthorisedError("Token missing required claims.")

        return SessionClaims(user_id=str(sub), exp=int(exp))

    def create_access_token(self, user_id: str) -> str:
        """Create an HS256 JWT for development/testing. Not for production use."""
        now = int(time.time())
        payload = {
            "sub": user_id,
            "exp": now + settings.jwt_access_token_expire_minutes * 60,
            "iat": now,
        }
        result: str = jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
        return result

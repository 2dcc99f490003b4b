"""
JWTService - Service pour la gestion des tokens JWT
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt
from jose.exceptions import JOSEError

from application.services.user_service import TokenProvider, TokenProviderError

logger = logging.getLogger(__name__)


class InvalidTokenError(Exception):
    """Token absent, mal signé, expiré ou incomplet"""


class JWTService(TokenProvider):
    """Émission et validation des tokens JWT.

    Le claim `sub` porte l'ID de l'utilisateur ; `iss`, `iat` et `exp` sont
    toujours renseignés.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60,
        issuer: str = "taskery-api"
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes
        self.issuer = issuer

    def generate(self, user_id: str, expires_delta: Optional[timedelta] = None) -> str:
        """Crée un token signé pour l'utilisateur"""
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self.expire_minutes))
        claims = {
            "sub": user_id,
            "iss": self.issuer,
            "iat": now,
            "exp": expire,
        }

        try:
            return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)
        except JOSEError as e:
            logger.error(f"JWT encode error: {e}")
            raise TokenProviderError(f"failed to sign token: {e}") from e

    def decode_token(self, token: str) -> Dict[str, Any]:
        """Décode un token JWT et vérifie sa signature, son émetteur et son expiration"""
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                options={"require_exp": True, "require_sub": True, "require_iss": True},
            )
        except JOSEError as e:
            logger.warning(f"JWT decode error: {e}")
            raise InvalidTokenError(f"Invalid token: {str(e)}") from e

    def validate(self, token: str) -> str:
        """Valide un token et retourne l'ID de l'utilisateur"""
        payload = self.decode_token(token)
        user_id = payload.get("sub")
        if not user_id:
            raise InvalidTokenError("Invalid token: subject is empty")
        return user_id

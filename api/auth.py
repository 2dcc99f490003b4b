"""
taskery-api/api/auth.py
Dépendance d'authentification (token Bearer JWT)
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from infrastructure.dependencies import get_jwt_service
from infrastructure.security.jwt_service import InvalidTokenError, JWTService

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    jwt_service: JWTService = Depends(get_jwt_service)
) -> str:
    """
    Dépendance FastAPI : valide le token Bearer et retourne l'ID de l'utilisateur
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None or credentials.scheme.lower() != "bearer":
        raise credentials_exception

    try:
        return jwt_service.validate(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning(f"Rejected token: {e}")
        raise credentials_exception

"""
Services de sécurité
"""

from infrastructure.security.jwt_service import InvalidTokenError, JWTService

__all__ = [
    "InvalidTokenError",
    "JWTService"
]

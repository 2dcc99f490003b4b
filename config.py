"""
taskery-api/config.py
Configuration de l'application (variables d'environnement et fichier .env)
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Paramètres de l'application"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Base de données
    database_url: str = "sqlite:///./taskery.db"
    database_pool_size: int = 10
    database_max_overflow: int = 20

    # JWT
    jwt_secret_key: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60
    jwt_issuer: str = "taskery-api"

    # HTTP (liste séparée par des virgules)
    cors_origins: str = "*"

    # Logging
    log_level: str = "INFO"
    log_colored: bool = False
    log_file_enabled: bool = False
    log_file_path: str = "logs/taskery-api.log"

    @property
    def cors_origin_list(self) -> List[str]:
        return [item.strip() for item in self.cors_origins.split(",") if item.strip()]


@lru_cache
def get_config() -> Config:
    """Instance unique de la configuration"""
    return Config()

"""
Dépendances FastAPI pour l'injection de services
"""

from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from infrastructure.database.session import SessionLocal
from infrastructure.database.repositories import (
    SQLAlchemyTaskRepository,
    SQLAlchemyUserRepository,
)
from infrastructure.security.jwt_service import JWTService
from application.services.task_service import TaskService
from application.services.user_service import UserService
from config import get_config


def get_db() -> Generator[Session, None, None]:
    """Dépendance pour obtenir une session de base de données"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_user_repository(db: Session = Depends(get_db)) -> SQLAlchemyUserRepository:
    """Dépendance pour obtenir le UserRepository"""
    return SQLAlchemyUserRepository(db)


def get_task_repository(db: Session = Depends(get_db)) -> SQLAlchemyTaskRepository:
    """Dépendance pour obtenir le TaskRepository"""
    return SQLAlchemyTaskRepository(db)


def get_jwt_service() -> JWTService:
    """Dépendance pour obtenir le JWTService"""
    config = get_config()
    return JWTService(
        secret_key=config.jwt_secret_key,
        algorithm=config.jwt_algorithm,
        expire_minutes=config.jwt_expire_minutes,
        issuer=config.jwt_issuer
    )


def get_user_service(
    user_repository: SQLAlchemyUserRepository = Depends(get_user_repository),
    jwt_service: JWTService = Depends(get_jwt_service)
) -> UserService:
    """Dépendance pour obtenir le UserService"""
    return UserService(user_repository, jwt_service)


def get_task_service(
    task_repository: SQLAlchemyTaskRepository = Depends(get_task_repository)
) -> TaskService:
    """Dépendance pour obtenir le TaskService"""
    return TaskService(task_repository)

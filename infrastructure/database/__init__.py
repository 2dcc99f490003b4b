"""
Infrastructure Database - Configuration et repositories SQLAlchemy
"""

from infrastructure.database.session import SessionLocal, create_db_engine, engine
from infrastructure.database.models import Base, TaskModel, UserModel
from infrastructure.database.repositories import (
    SQLAlchemyTaskRepository,
    SQLAlchemyUserRepository,
)

__all__ = [
    "Base",
    "engine",
    "create_db_engine",
    "SessionLocal",
    "UserModel",
    "TaskModel",
    "SQLAlchemyUserRepository",
    "SQLAlchemyTaskRepository"
]

"""
Modèles SQLAlchemy
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class UserModel(Base):
    """Modèle SQLAlchemy pour les utilisateurs"""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    username = Column(String(30), nullable=False)
    email = Column(String(320), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)

    tasks = relationship(
        "TaskModel",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True
    )


class TaskModel(Base):
    """Modèle SQLAlchemy pour les tâches"""
    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True)
    owner_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False
    )
    title = Column(String(50), nullable=False)
    description = Column(Text, nullable=False, default="")
    deadline = Column(DateTime(timezone=True), nullable=True)
    is_completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    owner = relationship("UserModel", back_populates="tasks")

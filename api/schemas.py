"""
taskery-api/api/schemas.py
Schémas Pydantic pour la validation et la sérialisation
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_serializer

from domain.entities import Task, User

# ============================================================================
# AUTHENTIFICATION
# ============================================================================

class RegisterRequest(BaseModel):
    """Schéma pour créer un compte"""
    username: str
    email: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

# ============================================================================
# UTILISATEURS
# ============================================================================

class UserResponse(BaseModel):
    """Schéma pour retourner un utilisateur (jamais le hash du mot de passe)"""
    id: str
    username: str
    email: str

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(id=str(user.id), username=str(user.username), email=str(user.email))


class UpdateUserRequest(BaseModel):
    """Changement du nom et/ou de l'email, confirmé par le mot de passe"""
    username: Optional[str] = None
    email: Optional[str] = None
    password: str


class ChangePasswordRequest(BaseModel):
    old_password: str
    new_password: str


class DeleteUserRequest(BaseModel):
    password: str

# ============================================================================
# TÂCHES
# ============================================================================

class TaskCreate(BaseModel):
    """Schéma pour créer une tâche"""
    title: str
    description: str = ""
    deadline: Optional[datetime] = None


class TitleUpdate(BaseModel):
    title: str


class DescriptionUpdate(BaseModel):
    description: str = Field(default="")


class DeadlineUpdate(BaseModel):
    deadline: datetime


class TaskResponse(BaseModel):
    """Schéma pour retourner une tâche"""
    id: str
    owner_id: str
    title: str
    description: str
    deadline: Optional[datetime] = None
    is_completed: bool
    completed_at: Optional[datetime] = None
    is_overdue: bool

    @field_serializer('deadline', 'completed_at')
    def serialize_datetime(self, dt: Optional[datetime], _info):
        if dt is None:
            return None
        return dt.isoformat()

    @classmethod
    def from_entity(cls, task: Task) -> "TaskResponse":
        return cls(
            id=str(task.id),
            owner_id=str(task.owner_id),
            title=str(task.title),
            description=str(task.description),
            deadline=task.deadline.value if task.deadline else None,
            is_completed=task.is_completed,
            completed_at=task.completed_at,
            is_overdue=task.is_overdue(),
        )

"""
taskery-api/api/endpoints.py
Endpoints de l'API : authentification, compte utilisateur et tâches
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from api import schemas
from api.auth import get_current_user_id
from application.errors import UnauthorizedError, UserNotFoundError
from application.services.task_service import TaskService
from application.services.user_service import UserService
from infrastructure.dependencies import get_task_service, get_user_service

logger = logging.getLogger(__name__)

auth_router = APIRouter(prefix="/auth", tags=["Authentication"])
user_router = APIRouter(prefix="/users", tags=["Users"])
task_router = APIRouter(prefix="/tasks", tags=["Tasks"])

# ============================================================================
# AUTHENTIFICATION
# ============================================================================

@auth_router.post("/register", response_model=schemas.UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: schemas.RegisterRequest,
    user_service: UserService = Depends(get_user_service)
):
    """Crée un nouveau compte utilisateur"""
    user = user_service.register(payload.username, payload.email, payload.password)
    return schemas.UserResponse.from_entity(user)


@auth_router.post("/login", response_model=schemas.Token)
def login(
    payload: schemas.LoginRequest,
    user_service: UserService = Depends(get_user_service)
):
    """Authentifie un utilisateur et retourne un token d'accès"""
    try:
        token = user_service.login(payload.email, payload.password)
    except UserNotFoundError as e:
        # Un email inconnu ne doit pas se distinguer d'un mauvais mot de passe
        raise UnauthorizedError() from e
    return schemas.Token(access_token=token, token_type="bearer")

# ============================================================================
# COMPTE UTILISATEUR
# ============================================================================

@user_router.get("/me", response_model=schemas.UserResponse)
def read_me(
    user_id: str = Depends(get_current_user_id),
    user_service: UserService = Depends(get_user_service)
):
    """Retourne l'utilisateur authentifié"""
    return schemas.UserResponse.from_entity(user_service.get_user(user_id))


@user_router.patch("/me", response_model=schemas.UserResponse)
def update_me(
    payload: schemas.UpdateUserRequest,
    user_id: str = Depends(get_current_user_id),
    user_service: UserService = Depends(get_user_service)
):
    """Change le nom d'utilisateur et/ou l'email"""
    if payload.username is None and payload.email is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="username or email is required"
        )

    user = user_service.update_profile(
        user_id, payload.password, new_username=payload.username, new_email=payload.email
    )
    return schemas.UserResponse.from_entity(user)


@user_router.put("/me/password", status_code=status.HTTP_204_NO_CONTENT)
def change_my_password(
    payload: schemas.ChangePasswordRequest,
    user_id: str = Depends(get_current_user_id),
    user_service: UserService = Depends(get_user_service)
):
    """Change le mot de passe de l'utilisateur authentifié"""
    user_service.change_password(user_id, payload.old_password, payload.new_password)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@user_router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def delete_me(
    payload: schemas.DeleteUserRequest,
    user_id: str = Depends(get_current_user_id),
    user_service: UserService = Depends(get_user_service)
):
    """Supprime le compte de l'utilisateur authentifié (et ses tâches)"""
    user_service.delete(user_id, payload.password)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# ============================================================================
# TÂCHES
# ============================================================================

@task_router.post("", response_model=schemas.TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: schemas.TaskCreate,
    user_id: str = Depends(get_current_user_id),
    task_service: TaskService = Depends(get_task_service)
):
    """Crée une tâche pour l'utilisateur authentifié"""
    task = task_service.create(payload.title, payload.description, user_id, payload.deadline)
    return schemas.TaskResponse.from_entity(task)


@task_router.get("", response_model=List[schemas.TaskResponse])
def list_tasks(
    user_id: str = Depends(get_current_user_id),
    task_service: TaskService = Depends(get_task_service)
):
    """Liste les tâches de l'utilisateur authentifié"""
    return [schemas.TaskResponse.from_entity(task) for task in task_service.find_by_owner(user_id)]


@task_router.get("/{task_id}", response_model=schemas.TaskResponse)
def get_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    task_service: TaskService = Depends(get_task_service)
):
    """Retourne une tâche de l'utilisateur authentifié"""
    return schemas.TaskResponse.from_entity(task_service.get(task_id, user_id))


@task_router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    task_service: TaskService = Depends(get_task_service)
):
    """Supprime une tâche de l'utilisateur authentifié"""
    task_service.delete(task_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@task_router.put("/{task_id}/title", response_model=schemas.TaskResponse)
def change_task_title(
    task_id: str,
    payload: schemas.TitleUpdate,
    user_id: str = Depends(get_current_user_id),
    task_service: TaskService = Depends(get_task_service)
):
    """Change le titre d'une tâche"""
    return schemas.TaskResponse.from_entity(task_service.change_title(task_id, user_id, payload.title))


@task_router.put("/{task_id}/description", response_model=schemas.TaskResponse)
def change_task_description(
    task_id: str,
    payload: schemas.DescriptionUpdate,
    user_id: str = Depends(get_current_user_id),
    task_service: TaskService = Depends(get_task_service)
):
    """Change la description d'une tâche"""
    task = task_service.change_description(task_id, user_id, payload.description)
    return schemas.TaskResponse.from_entity(task)


@task_router.put("/{task_id}/deadline", response_model=schemas.TaskResponse)
def set_task_deadline(
    task_id: str,
    payload: schemas.DeadlineUpdate,
    user_id: str = Depends(get_current_user_id),
    task_service: TaskService = Depends(get_task_service)
):
    """Ajoute ou remplace l'échéance d'une tâche"""
    task = task_service.set_deadline(task_id, user_id, payload.deadline)
    return schemas.TaskResponse.from_entity(task)


@task_router.delete("/{task_id}/deadline", response_model=schemas.TaskResponse)
def remove_task_deadline(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    task_service: TaskService = Depends(get_task_service)
):
    """Supprime l'échéance d'une tâche"""
    return schemas.TaskResponse.from_entity(task_service.remove_deadline(task_id, user_id))


@task_router.post("/{task_id}/complete", response_model=schemas.TaskResponse)
def complete_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    task_service: TaskService = Depends(get_task_service)
):
    """Marque une tâche comme terminée (idempotent)"""
    return schemas.TaskResponse.from_entity(task_service.complete(task_id, user_id))


@task_router.post("/{task_id}/reopen", response_model=schemas.TaskResponse)
def reopen_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    task_service: TaskService = Depends(get_task_service)
):
    """Rouvre une tâche terminée (idempotent)"""
    return schemas.TaskResponse.from_entity(task_service.reopen(task_id, user_id))

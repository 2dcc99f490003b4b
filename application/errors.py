"""
Erreurs applicatives - Erreurs métier exposées par les services
"""

from domain.errors import DomainError


class ApplicationError(DomainError):
    """Base des erreurs levées par les services applicatifs"""
    message = "application error"


class OperationFailedError(ApplicationError):
    """Échec inattendu d'une opération (l'erreur d'origine est disponible via `cause`)"""
    message = "operation failed"


# ============================================================================
# UTILISATEURS
# ============================================================================

class UserExistsError(ApplicationError):
    message = "user already exists"


class UserNotFoundError(ApplicationError):
    message = "user was not found"


class UnauthorizedError(ApplicationError):
    message = "invalid credentials"


class EmailAlreadyTakenError(ApplicationError):
    message = "email is already taken"


class RegisterFailedError(OperationFailedError):
    message = "failed to register user"


class LoginFailedError(OperationFailedError):
    message = "failed to login"


class GetUserFailedError(OperationFailedError):
    message = "failed to get user"


class ChangeUsernameFailedError(OperationFailedError):
    message = "failed to change username"


class ChangeEmailFailedError(OperationFailedError):
    message = "failed to change email"


class ChangePasswordFailedError(OperationFailedError):
    message = "failed to change password"


class UpdateProfileFailedError(OperationFailedError):
    message = "failed to update profile"


class DeleteUserFailedError(OperationFailedError):
    message = "failed to delete user"


# ============================================================================
# TÂCHES
# ============================================================================

class TaskExistsError(ApplicationError):
    message = "task already exists"


class TaskNotFoundError(ApplicationError):
    message = "task was not found"


class TaskOwnerNotFoundError(ApplicationError):
    message = "task owner was not found"


class TaskAccessDeniedError(ApplicationError):
    message = "task access denied"


class TaskCreateFailedError(OperationFailedError):
    message = "failed to create task"


class TaskGetFailedError(OperationFailedError):
    message = "failed to get task"


class TaskChangeTitleFailedError(OperationFailedError):
    message = "failed to change title"


class TaskChangeDescriptionFailedError(OperationFailedError):
    message = "failed to change description"


class TaskSetDeadlineFailedError(OperationFailedError):
    message = "failed to set deadline"


class TaskRemoveDeadlineFailedError(OperationFailedError):
    message = "failed to remove deadline"


class TaskCompleteFailedError(OperationFailedError):
    message = "failed to complete task"


class TaskReopenFailedError(OperationFailedError):
    message = "failed to reopen task"


class TaskDeleteFailedError(OperationFailedError):
    message = "failed to delete task"


class TaskFindByOwnerFailedError(OperationFailedError):
    message = "failed to find tasks by owner"

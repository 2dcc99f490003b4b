"""
UserService - Service applicatif pour la gestion des utilisateurs
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Type

from domain.entities.user import User
from domain.repositories.errors import (
    RepositoryError, UserRecordExistsError, UserRecordNotFoundError
)
from domain.repositories.user_repository import UserRepository
from domain.value_objects.user import PasswordMismatchError, PasswordVerificationError
from application.errors import (
    ChangeEmailFailedError,
    ChangePasswordFailedError,
    ChangeUsernameFailedError,
    DeleteUserFailedError,
    EmailAlreadyTakenError,
    GetUserFailedError,
    LoginFailedError,
    OperationFailedError,
    RegisterFailedError,
    UnauthorizedError,
    UpdateProfileFailedError,
    UserExistsError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


class TokenProviderError(Exception):
    """Échec de génération d'un token"""


class TokenProvider(ABC):
    """Interface pour la génération des tokens d'authentification"""

    @abstractmethod
    def generate(self, user_id: str) -> str:
        """Génère un token signé pour l'utilisateur (TokenProviderError en cas d'échec)"""
        pass


class UserService:
    """Service pour la gestion des utilisateurs"""

    def __init__(self, user_repository: UserRepository, token_provider: TokenProvider):
        if user_repository is None or token_provider is None:
            raise ValueError("user repository and token provider are required")
        self.user_repository = user_repository
        self.token_provider = token_provider

    def register(self, username: str, email: str, password: str) -> User:
        """Crée un nouvel utilisateur.

        Les erreurs de validation sont levées telles quelles. Lève
        UserExistsError si l'utilisateur existe déjà et RegisterFailedError
        pour toute autre erreur de stockage.
        """
        user = User.register(username, email, password)

        try:
            self.user_repository.create(user)
        except UserRecordExistsError as e:
            logger.warning(f"Registration rejected: user '{user.email}' already exists")
            raise UserExistsError() from e
        except RepositoryError as e:
            logger.error(f"Registration failed for '{user.email}': {e}")
            raise RegisterFailedError() from e

        logger.info(f"User registered: {user.id}")
        return user

    def login(self, email: str, password: str) -> str:
        """Authentifie un utilisateur par email et mot de passe et retourne un token.

        Lève UserNotFoundError si aucun compte ne correspond, UnauthorizedError
        si le mot de passe est faux et LoginFailedError si le stockage, la
        vérification du hash ou la génération du token échoue.
        """
        email = (email or "").strip()
        try:
            user = self.user_repository.find_by_email(email)
        except UserRecordNotFoundError as e:
            logger.warning(f"Authentication failed: User '{email}' not found")
            raise UserNotFoundError() from e
        except RepositoryError as e:
            logger.error(f"Authentication failed: lookup error for '{email}': {e}")
            raise LoginFailedError() from e

        self._verify_password(user, password, LoginFailedError)

        try:
            token = self.token_provider.generate(str(user.id))
        except TokenProviderError as e:
            logger.error(f"Authentication failed: token generation error for user {user.id}: {e}")
            raise LoginFailedError() from e

        logger.info(f"Authentication success: User {user.id} authenticated")
        return token

    def get_user(self, user_id: str) -> User:
        """Récupère un utilisateur par son ID"""
        return self._find_by_id(user_id, GetUserFailedError)

    def change_username(self, user_id: str, new_username: str, password: str) -> User:
        """Change le nom d'utilisateur après vérification du mot de passe"""
        user = self._find_by_id(user_id, ChangeUsernameFailedError)
        self._verify_password(user, password, ChangeUsernameFailedError)

        user.change_username(new_username)

        self._update(user, ChangeUsernameFailedError)
        logger.info(f"Username changed for user {user.id}")
        return user

    def change_email(self, user_id: str, new_email: str, password: str) -> User:
        """Change l'email après vérification du mot de passe.

        Lève EmailAlreadyTakenError si l'email appartient à un autre compte.
        """
        user = self._find_by_id(user_id, ChangeEmailFailedError)
        self._verify_password(user, password, ChangeEmailFailedError)

        self._ensure_email_available(user, new_email, ChangeEmailFailedError)
        user.change_email(new_email)

        self._update(user, ChangeEmailFailedError)
        logger.info(f"Email changed for user {user.id}")
        return user

    def update_profile(
        self,
        user_id: str,
        password: str,
        new_username: Optional[str] = None,
        new_email: Optional[str] = None
    ) -> User:
        """Change le nom d'utilisateur et/ou l'email en une seule écriture.

        Toutes les vérifications (mot de passe, validation, disponibilité de
        l'email) précèdent l'écriture : en cas d'erreur rien n'est modifié.
        """
        user = self._find_by_id(user_id, UpdateProfileFailedError)
        self._verify_password(user, password, UpdateProfileFailedError)

        if new_username is not None:
            user.change_username(new_username)
        if new_email is not None:
            user.change_email(new_email)
            self._ensure_email_available(user, new_email, UpdateProfileFailedError)

        self._update(user, UpdateProfileFailedError)
        logger.info(f"Profile updated for user {user.id}")
        return user

    def change_password(self, user_id: str, old_password: str, new_password: str) -> None:
        """Change le mot de passe après vérification de l'ancien"""
        user = self._find_by_id(user_id, ChangePasswordFailedError)

        try:
            user.change_password(old_password, new_password)
        except PasswordMismatchError as e:
            logger.warning(f"Password change rejected for user {user.id}: wrong password")
            raise UnauthorizedError() from e
        except PasswordVerificationError as e:
            logger.error(f"Password change failed for user {user.id}: {e}")
            raise ChangePasswordFailedError() from e

        self._update(user, ChangePasswordFailedError)
        logger.info(f"Password changed for user {user.id}")

    def delete(self, user_id: str, password: str) -> None:
        """Supprime un utilisateur après vérification du mot de passe"""
        user = self._find_by_id(user_id, DeleteUserFailedError)
        self._verify_password(user, password, DeleteUserFailedError)

        try:
            self.user_repository.delete(str(user.id))
        except UserRecordNotFoundError as e:
            raise UserNotFoundError() from e
        except RepositoryError as e:
            logger.error(f"Deletion failed for user {user.id}: {e}")
            raise DeleteUserFailedError() from e

        logger.info(f"User deleted: {user.id}")

    def _find_by_id(self, user_id: str, failed_error: Type[OperationFailedError]) -> User:
        try:
            return self.user_repository.find_by_id(str(user_id))
        except UserRecordNotFoundError as e:
            raise UserNotFoundError() from e
        except RepositoryError as e:
            logger.error(f"Lookup failed for user {user_id}: {e}")
            raise failed_error() from e

    def _verify_password(self, user: User, password: str, failed_error: Type[OperationFailedError]) -> None:
        try:
            user.verify_password(password)
        except PasswordMismatchError as e:
            logger.warning(f"Invalid password for user {user.id}")
            raise UnauthorizedError() from e
        except PasswordVerificationError as e:
            logger.error(f"Password verification error for user {user.id}: {e}")
            raise failed_error() from e

    def _ensure_email_available(
        self, user: User, new_email: str, failed_error: Type[OperationFailedError]
    ) -> None:
        # L'adresse actuelle de l'utilisateur n'est pas un conflit
        try:
            owner = self.user_repository.find_by_email((new_email or "").strip())
        except UserRecordNotFoundError:
            return
        except RepositoryError as e:
            logger.error(f"Email lookup failed for user {user.id}: {e}")
            raise failed_error() from e

        if owner.id != user.id:
            logger.warning(f"Email change rejected for user {user.id}: email already taken")
            raise EmailAlreadyTakenError()

    def _update(self, user: User, failed_error: Type[OperationFailedError]) -> None:
        # Une ligne disparue entre la lecture et la mise à jour est un not-found
        try:
            self.user_repository.update(user)
        except UserRecordNotFoundError as e:
            raise UserNotFoundError() from e
        except UserRecordExistsError as e:
            logger.warning(f"Update rejected for user {user.id}: email already taken")
            raise EmailAlreadyTakenError() from e
        except RepositoryError as e:
            logger.error(f"Update failed for user {user.id}: {e}")
            raise failed_error() from e

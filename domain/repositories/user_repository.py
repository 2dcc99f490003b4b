"""
Interface UserRepository - Définit les opérations d'accès aux données pour User
"""

from abc import ABC, abstractmethod
from domain.entities.user import User


class UserRepository(ABC):
    """Interface pour le repository des utilisateurs.

    Toute autre défaillance du stockage est levée comme RepositoryError.
    """

    @abstractmethod
    def create(self, user: User) -> None:
        """Enregistre un nouvel utilisateur.

        Lève UserRecordExistsError si l'ID ou l'email est déjà utilisé.
        """
        pass

    @abstractmethod
    def find_by_id(self, user_id: str) -> User:
        """Trouve un utilisateur par son ID (UserRecordNotFoundError sinon)"""
        pass

    @abstractmethod
    def find_by_email(self, email: str) -> User:
        """Trouve un utilisateur par son email (UserRecordNotFoundError sinon)"""
        pass

    @abstractmethod
    def update(self, user: User) -> None:
        """Met à jour un utilisateur existant.

        Lève UserRecordNotFoundError si aucune ligne n'a été modifiée.
        """
        pass

    @abstractmethod
    def delete(self, user_id: str) -> None:
        """Supprime un utilisateur (UserRecordNotFoundError si absent)"""
        pass

"""
Entité User - Modèle métier pour les utilisateurs
"""

import uuid
from dataclasses import dataclass

from domain.errors import ValidationError
from domain.value_objects.user import Email, Password, Username


class UserIdInvalidError(ValidationError):
    field = "id"
    message = "user ID is invalid"


@dataclass
class User:
    """Entité User du domaine.

    L'identifiant et l'email sont uniques pour chaque utilisateur. L'identifiant
    ne change jamais après la création ; le nom, l'email et le mot de passe ne
    changent qu'au travers des méthodes `change_*`, qui revalident la valeur.
    """
    id: uuid.UUID
    username: Username
    email: Email
    password: Password

    def __setattr__(self, name, value):
        if name == "id" and "id" in self.__dict__:
            raise AttributeError("user ID is immutable")
        super().__setattr__(name, value)

    @classmethod
    def register(cls, username: str, email: str, raw_password: str) -> "User":
        """Crée un nouvel utilisateur à partir de valeurs brutes.

        Les valeurs sont validées dans l'ordre username, email, mot de passe ;
        la première erreur de validation est levée telle quelle.
        """
        username_vo = Username(username)
        email_vo = Email(email)
        password_vo = Password.from_raw(raw_password)

        return cls(
            id=uuid.uuid4(),
            username=username_vo,
            email=email_vo,
            password=password_vo,
        )

    @classmethod
    def from_persisted(cls, id: str, username: str, email: str, password_hash: str) -> "User":
        """Reconstruit un utilisateur relu depuis le stockage (hash repris tel quel)"""
        try:
            user_id = uuid.UUID(str(id))
        except (ValueError, TypeError) as e:
            raise UserIdInvalidError() from e

        return cls(
            id=user_id,
            username=Username(username),
            email=Email(email),
            password=Password.from_hash(password_hash),
        )

    def verify_password(self, raw: str) -> None:
        """Vérifie un mot de passe en clair (voir Password.verify)"""
        self.password.verify(raw)

    def change_username(self, new_username: str) -> None:
        """Change le nom d'utilisateur"""
        self.username = Username(new_username)

    def change_email(self, new_email: str) -> None:
        """Change l'adresse email"""
        self.email = Email(new_email)

    def change_password(self, old_password: str, new_password: str) -> None:
        """Change le mot de passe après vérification de l'ancien"""
        self.password.verify(old_password)
        self.password = Password.from_raw(new_password)

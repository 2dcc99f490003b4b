"""
Value objects de l'utilisateur - Username, Email, Password
"""

from dataclasses import dataclass, field

from email_validator import EmailNotValidError, validate_email
from passlib.context import CryptContext

from domain.errors import DomainError, ValidationError

USERNAME_MIN_LENGTH = 2
USERNAME_MAX_LENGTH = 30

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 72
BCRYPT_ROUNDS = 10

_pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


# ============================================================================
# USERNAME
# ============================================================================

class UsernameError(ValidationError):
    field = "username"
    message = "username is invalid"


class UsernameTooShortError(UsernameError):
    message = "username is too short"


class UsernameEmptyError(UsernameTooShortError):
    message = "username is empty"


class UsernameTooLongError(UsernameError):
    message = "username is too long"


@dataclass(frozen=True)
class Username:
    """Nom d'utilisateur (2 à 30 caractères, sans normalisation)"""
    value: str

    def __post_init__(self):
        if not self.value:
            raise UsernameEmptyError()
        if len(self.value) < USERNAME_MIN_LENGTH:
            raise UsernameTooShortError()
        if len(self.value) > USERNAME_MAX_LENGTH:
            raise UsernameTooLongError()

    def __str__(self) -> str:
        return self.value


# ============================================================================
# EMAIL
# ============================================================================

class EmailError(ValidationError):
    field = "email"
    message = "email is invalid"


class EmailEmptyError(EmailError):
    message = "email is empty"


class EmailInvalidError(EmailError):
    message = "email is invalid"


@dataclass(frozen=True)
class Email:
    """Adresse email, stockée sans les espaces de début et de fin"""
    value: str

    def __post_init__(self):
        value = (self.value or "").strip()
        if not value:
            raise EmailEmptyError()

        try:
            validate_email(value, check_deliverability=False, globally_deliverable=False)
        except EmailNotValidError as e:
            raise EmailInvalidError(f"email is invalid: {e}") from e

        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return self.value


# ============================================================================
# PASSWORD
# ============================================================================

class PasswordError(ValidationError):
    field = "password"
    message = "password is invalid"


class PasswordEmptyError(PasswordError):
    message = "password is empty"


class PasswordInvalidError(PasswordError):
    message = "password must contain only ASCII characters"


class PasswordTooShortError(PasswordError):
    message = "password is too short"


class PasswordTooLongError(PasswordError):
    message = "password is too long"


class PasswordHashingError(DomainError):
    message = "failed to hash password"


class PasswordMismatchError(DomainError):
    message = "password does not match the hash"


class PasswordVerificationError(DomainError):
    message = "failed to verify the password"


@dataclass(frozen=True)
class Password:
    """Hash bcrypt d'un mot de passe.

    Le mot de passe en clair n'est jamais conservé. Utiliser `from_raw` pour
    un nouveau mot de passe et `from_hash` pour un hash relu depuis le stockage.
    """
    hash: str = field(repr=False)

    @classmethod
    def from_raw(cls, raw: str) -> "Password":
        """Valide un mot de passe en clair et le hache"""
        if not raw:
            raise PasswordEmptyError()
        if not raw.isascii():
            raise PasswordInvalidError()
        if len(raw) < PASSWORD_MIN_LENGTH:
            raise PasswordTooShortError()
        if len(raw) > PASSWORD_MAX_LENGTH:
            raise PasswordTooLongError()

        try:
            hashed = _pwd_context.hash(raw)
        except (ValueError, TypeError) as e:
            raise PasswordHashingError() from e

        return cls(hash=hashed)

    @classmethod
    def from_hash(cls, hashed: str) -> "Password":
        """Reprend un hash existant tel quel, sans validation"""
        return cls(hash=hashed)

    def verify(self, raw: str) -> None:
        """Vérifie un mot de passe en clair contre le hash.

        Lève PasswordMismatchError si le mot de passe ne correspond pas et
        PasswordVerificationError si le hash ne peut pas être vérifié.
        """
        try:
            matches = _pwd_context.verify(raw, self.hash)
        except (ValueError, TypeError) as e:
            raise PasswordVerificationError(f"failed to verify the password: {e}") from e

        if not matches:
            raise PasswordMismatchError()

    def __str__(self) -> str:
        return self.hash

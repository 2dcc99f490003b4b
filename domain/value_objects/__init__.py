"""
Value objects du domaine
"""

from domain.value_objects.user import (
    Username,
    UsernameError,
    UsernameEmptyError,
    UsernameTooShortError,
    UsernameTooLongError,
    Email,
    EmailError,
    EmailEmptyError,
    EmailInvalidError,
    Password,
    PasswordError,
    PasswordEmptyError,
    PasswordInvalidError,
    PasswordTooShortError,
    PasswordTooLongError,
    PasswordHashingError,
    PasswordMismatchError,
    PasswordVerificationError,
)
from domain.value_objects.task import (
    Title,
    TitleError,
    TitleEmptyError,
    TitleTooLongError,
    Description,
    DescriptionTooLongError,
    Deadline,
    DeadlineInPastError,
)

__all__ = [
    "Username",
    "UsernameError",
    "UsernameEmptyError",
    "UsernameTooShortError",
    "UsernameTooLongError",
    "Email",
    "EmailError",
    "EmailEmptyError",
    "EmailInvalidError",
    "Password",
    "PasswordError",
    "PasswordEmptyError",
    "PasswordInvalidError",
    "PasswordTooShortError",
    "PasswordTooLongError",
    "PasswordHashingError",
    "PasswordMismatchError",
    "PasswordVerificationError",
    "Title",
    "TitleError",
    "TitleEmptyError",
    "TitleTooLongError",
    "Description",
    "DescriptionTooLongError",
    "Deadline",
    "DeadlineInPastError",
]

"""
Erreurs de base du domaine
"""

from typing import Optional, Type


class DomainError(Exception):
    """Base de toutes les erreurs levées par le domaine et la couche applicative"""

    message = "domain error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)

    @property
    def cause(self) -> Optional[BaseException]:
        """Erreur d'origine, si celle-ci a été chaînée avec `raise ... from`"""
        return self.__cause__


class ValidationError(DomainError, ValueError):
    """Violation d'une règle de validation d'un value object ou d'une entité.

    `field` identifie le champ concerné pour les réponses de validation.
    """

    field: Optional[str] = None
    message = "invalid value"


def is_any(err: BaseException, *targets: Type[BaseException]) -> bool:
    """Indique si `err`, ou une erreur de sa chaîne `__cause__`, est une instance de l'un des types donnés"""
    current: Optional[BaseException] = err
    seen = set()
    while current is not None and id(current) not in seen:
        if isinstance(current, targets):
            return True
        seen.add(id(current))
        current = current.__cause__
    return False

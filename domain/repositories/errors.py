"""
Erreurs levées par les implémentations des repositories
"""


class RepositoryError(Exception):
    """Échec du stockage (erreur d'infrastructure opaque).

    L'erreur du driver est chaînée via `raise ... from`.
    """


class UserRecordExistsError(RepositoryError):
    """Un utilisateur avec le même ID ou le même email existe déjà"""


class UserRecordNotFoundError(RepositoryError):
    """Aucun utilisateur ne correspond"""


class TaskRecordExistsError(RepositoryError):
    """Une tâche avec le même ID existe déjà"""


class TaskRecordNotFoundError(RepositoryError):
    """Aucune tâche ne correspond"""


class TaskOwnerRecordNotFoundError(RepositoryError):
    """Le propriétaire de la tâche n'existe pas (violation de clé étrangère)"""

"""
Configuration de la session de base de données SQLAlchemy
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from config import get_config


def create_db_engine(database_url: str, **kwargs) -> Engine:
    """Crée le moteur SQLAlchemy.

    SQLite n'applique les clés étrangères qu'avec `PRAGMA foreign_keys=ON`,
    activé ici à chaque connexion.
    """
    config = get_config()

    if database_url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        db_engine = create_engine(database_url, **kwargs)

        @event.listens_for(db_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return db_engine

    kwargs.setdefault("pool_size", config.database_pool_size)
    kwargs.setdefault("max_overflow", config.database_max_overflow)
    return create_engine(database_url, pool_pre_ping=True, **kwargs)


# Créer le moteur de base de données
engine = create_db_engine(get_config().database_url)

# Créer la session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

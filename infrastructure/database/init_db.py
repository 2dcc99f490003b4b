"""
Initialisation de la base de données
"""

import logging
from typing import Optional

from sqlalchemy.engine import Engine

from infrastructure.database.models import Base
from infrastructure.database.session import engine as default_engine

logger = logging.getLogger(__name__)


def init_db(engine: Optional[Engine] = None) -> None:
    """Initialise la base de données (crée les tables manquantes)"""
    target = engine or default_engine
    Base.metadata.create_all(bind=target)
    logger.info(f"Database tables ready ({target.url.get_backend_name()})")

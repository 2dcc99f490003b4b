"""
Horloge du domaine
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Retourne l'instant courant en UTC (timezone-aware)"""
    return datetime.now(timezone.utc)

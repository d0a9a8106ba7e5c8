"""
Database strategy lookup for dialect-specific column description.
"""
from functools import lru_cache

from dbq.strategy.base import _STRATEGY_REGISTRY
from dbq.strategy.base import DatabaseStrategy as DatabaseStrategy
from dbq.strategy.base import register_strategy as register_strategy
from dbq.strategy.generic import GenericStrategy as GenericStrategy
from dbq.strategy.postgres import PostgresStrategy as PostgresStrategy
from dbq.strategy.sqlite import SQLiteStrategy as SQLiteStrategy
from dbq.utils import get_dialect_name


@lru_cache(maxsize=8)
def _strategy_for(dialect: str) -> DatabaseStrategy:
    """Get cached strategy instance for a dialect, generic when unregistered."""
    return _STRATEGY_REGISTRY.get(dialect, GenericStrategy)()


def get_db_strategy(cn) -> DatabaseStrategy:
    """Get database strategy for the connection."""
    return _strategy_for(get_dialect_name(cn))

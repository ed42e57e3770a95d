"""SQLAlchemy repository implementations."""

from cryptodash.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    get_session,
    init_db,
    reset_database,
    Base,
)
from cryptodash.repositories.sqlalchemy.holding_repo import SqlAlchemyHoldingRepository
from cryptodash.repositories.sqlalchemy.snapshot_repo import SqlAlchemySnapshotRepository
from cryptodash.repositories.sqlalchemy.alert_repo import SqlAlchemyAlertRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "get_session",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyHoldingRepository",
    "SqlAlchemySnapshotRepository",
    "SqlAlchemyAlertRepository",
]

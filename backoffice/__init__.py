"""Real-estate back-office API package"""

from backoffice.db_context import DatabaseManager
from backoffice.features import RepositoryFeature, StatusFlagFeature, TimestampFeature
from backoffice.query_builder import QueryBuilder
from backoffice.repository import Repository, ResourceConfig

__all__ = [
    "DatabaseManager",
    "QueryBuilder",
    "Repository",
    "ResourceConfig",
    "RepositoryFeature",
    "TimestampFeature",
    "StatusFlagFeature",
]

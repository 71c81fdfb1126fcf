"""Document database abstractions and implementations."""

from techtube.commons.infrastructure.documentdb.base import DocumentDBBase, HealthStatus
from techtube.commons.infrastructure.documentdb.mongodb_provider import MongoDBDocumentDB

__all__ = [
    # Base classes
    "DocumentDBBase",
    "HealthStatus",
    # Implementations
    "MongoDBDocumentDB",
]

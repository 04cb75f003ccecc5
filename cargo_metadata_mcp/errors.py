"""
Error types and query results for the Cargo Metadata MCP server.

Every failure a query can hit falls into one of three kinds:
- resolution: `cargo metadata` could not produce a snapshot
- missing_data: the snapshot lacks a root package where one is needed
- serialization: a projection could not be rendered as JSON
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Closed set of query failure kinds."""

    RESOLUTION = "resolution"
    MISSING_DATA = "missing_data"
    SERIALIZATION = "serialization"


class MetadataError(Exception):
    """Base exception for metadata queries."""

    kind: ErrorKind

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ResolutionError(MetadataError):
    """Raised when cargo metadata cannot be resolved for a manifest"""

    kind = ErrorKind.RESOLUTION


class MissingDataError(MetadataError):
    """Raised when the snapshot has no root package"""

    kind = ErrorKind.MISSING_DATA

    def __init__(self, message: str = "No root package found"):
        super().__init__(message)


class SerializationError(MetadataError):
    """Raised when a projection cannot be serialized"""

    kind = ErrorKind.SERIALIZATION


@dataclass
class QueryResult:
    """Result from a metadata query: a JSON payload or a typed error."""

    success: bool
    payload: Optional[str] = None
    error: Optional[MetadataError] = None

    @classmethod
    def ok(cls, payload: str) -> "QueryResult":
        return cls(success=True, payload=payload)

    @classmethod
    def fail(cls, error: MetadataError) -> "QueryResult":
        return cls(success=False, error=error)

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error else None

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error else None

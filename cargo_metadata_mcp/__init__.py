"""
Cargo Metadata MCP Server

Serves `cargo metadata` queries to MCP clients from a lock-guarded cache.
"""

from .errors import ErrorKind, MetadataError, QueryResult
from .metadata_cache import MetadataCache
from .queries import MetadataQueries
from .resolver import CargoMetadataResolver

__version__ = "0.1.0"
__all__ = [
    "CargoMetadataResolver",
    "ErrorKind",
    "MetadataCache",
    "MetadataError",
    "MetadataQueries",
    "QueryResult",
]

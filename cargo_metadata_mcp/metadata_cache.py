"""
MetadataCache - Lock-Guarded Snapshot Cache for Cargo Metadata

Keeps resolved `cargo metadata` output in memory so the expensive cargo
invocation runs once per server lifetime.

Modes:
- sticky (default): the first successfully resolved snapshot is served for
  every later call, whatever manifest path is passed
- per_manifest: one snapshot per absolute manifest path

All access goes through a single threading.Lock held for the whole
resolve-or-fetch-then-read, so at most one cargo process runs at a time.
"""

import logging
import os
import threading
from typing import Callable, Dict, Optional, TypeVar

from .errors import MetadataError, ResolutionError
from .models import MetadataSnapshot
from .resolver import MetadataResolver

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MetadataCache:
    """
    Single-slot snapshot cache in front of a metadata resolver.
    Failed resolutions are never stored; the next call retries.
    """

    def __init__(self, resolver: MetadataResolver, per_manifest: bool = False):
        """
        Initialize the cache.

        Args:
            resolver: Callable turning a manifest path into a MetadataSnapshot
            per_manifest: Key snapshots by manifest path instead of keeping
                only the first one (default False)
        """
        self.resolver = resolver
        self.per_manifest = per_manifest
        self.snapshots: Dict[str, MetadataSnapshot] = {}
        self.first_manifest_path: Optional[str] = None
        self.lock = threading.Lock()

        # Statistics
        self.total_gets = 0
        self.total_hits = 0
        self.total_resolutions = 0
        self.total_failures = 0

    @property
    def mode(self) -> str:
        return "per_manifest" if self.per_manifest else "sticky"

    def _key(self, manifest_path: str) -> str:
        return os.path.abspath(os.path.expanduser(str(manifest_path)))

    def _lookup(self, manifest_path: str) -> Optional[MetadataSnapshot]:
        if self.per_manifest:
            return self.snapshots.get(self._key(manifest_path))
        if self.first_manifest_path is None:
            return None
        return self.snapshots.get(self.first_manifest_path)

    def _resolve_locked(self, manifest_path: str) -> MetadataSnapshot:
        """Return the cached snapshot or resolve it. Caller holds the lock."""
        self.total_gets += 1

        snapshot = self._lookup(manifest_path)
        if snapshot is not None:
            self.total_hits += 1
            return snapshot

        self.total_resolutions += 1
        logger.info("Resolving cargo metadata for %s", manifest_path)
        try:
            snapshot = self.resolver(manifest_path)
        except MetadataError as e:
            self.total_failures += 1
            logger.warning("cargo metadata failed for %s: %s", manifest_path, e.message)
            raise ResolutionError(f"Failed to get cargo metadata: {e.message}")

        key = self._key(manifest_path)
        self.snapshots[key] = snapshot
        if self.first_manifest_path is None:
            self.first_manifest_path = key

        logger.info(
            "Cached metadata for %s (%d packages, %d workspace members)",
            key,
            len(snapshot.packages),
            len(snapshot.workspace_members),
        )
        return snapshot

    def get_metadata(self, manifest_path: str) -> MetadataSnapshot:
        """
        Get the snapshot for a manifest, resolving it on first use.

        Args:
            manifest_path: Path to Cargo.toml

        Returns:
            Cached or freshly resolved MetadataSnapshot

        Raises:
            ResolutionError: If the resolver fails (nothing is cached)
        """
        with self.lock:
            return self._resolve_locked(manifest_path)

    def snapshot_for(
        self, manifest_path: str, read: Callable[[MetadataSnapshot], T]
    ) -> T:
        """
        Resolve-or-fetch the snapshot and run `read` on it without
        releasing the lock in between.
        """
        with self.lock:
            snapshot = self._resolve_locked(manifest_path)
            return read(snapshot)

    def get_stats(self) -> Dict:
        """
        Get cache statistics.

        Returns:
            Dictionary with cache counters and mode
        """
        with self.lock:
            hit_rate = self.total_hits / self.total_gets if self.total_gets > 0 else 0.0
            return {
                "mode": self.mode,
                "entries": len(self.snapshots),
                "first_manifest_path": self.first_manifest_path,
                "total_gets": self.total_gets,
                "total_hits": self.total_hits,
                "total_resolutions": self.total_resolutions,
                "total_failures": self.total_failures,
                "hit_rate": round(hit_rate, 3),
            }

    def clear(self) -> None:
        """Drop every cached snapshot."""
        with self.lock:
            self.snapshots.clear()
            self.first_manifest_path = None

"""
Metadata resolution via `cargo metadata`.

The resolver is the only component that touches the outside world: it
spawns cargo, which may read manifests, hit the registry and download
index data. Anything callable as `resolver(manifest_path) -> MetadataSnapshot`
can stand in for it.
"""

import json
import logging
import subprocess
from typing import List, Optional, Protocol

from pydantic import ValidationError

from .config import Settings, get_settings
from .errors import ResolutionError
from .models import MetadataSnapshot

logger = logging.getLogger(__name__)


class MetadataResolver(Protocol):
    """Turns a manifest path into a snapshot or raises ResolutionError."""

    def __call__(self, manifest_path: str) -> MetadataSnapshot: ...


class CargoMetadataResolver:
    """Runs `cargo metadata --format-version 1` for a manifest."""

    def __init__(
        self,
        cargo_path: str = "cargo",
        extra_args: Optional[List[str]] = None,
        timeout: Optional[float] = None,
    ):
        self.cargo_path = cargo_path
        self.extra_args = list(extra_args or [])
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "CargoMetadataResolver":
        settings = settings or get_settings()
        return cls(
            cargo_path=settings.cargo_path,
            extra_args=settings.cargo_metadata_args,
            timeout=settings.cargo_metadata_timeout_seconds,
        )

    def build_command(self, manifest_path: str) -> List[str]:
        return [
            self.cargo_path,
            "metadata",
            "--format-version",
            "1",
            "--manifest-path",
            str(manifest_path),
            *self.extra_args,
        ]

    def __call__(self, manifest_path: str) -> MetadataSnapshot:
        """
        Resolve metadata for a manifest.

        Args:
            manifest_path: Path to Cargo.toml

        Returns:
            Parsed MetadataSnapshot

        Raises:
            ResolutionError: If cargo is missing or cannot be executed, times
                out, exits non-zero, or prints something that is not cargo
                metadata JSON
        """
        cmd = self.build_command(manifest_path)
        logger.debug("Running %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except FileNotFoundError:
            raise ResolutionError(f"cargo executable not found: {self.cargo_path}")
        except OSError as e:
            raise ResolutionError(f"Failed to run {self.cargo_path}: {e}")
        except subprocess.TimeoutExpired:
            raise ResolutionError(
                f"cargo metadata timed out after {self.timeout}s for {manifest_path}"
            )

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise ResolutionError(
                stderr or f"cargo metadata exited with status {result.returncode}"
            )

        try:
            data = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise ResolutionError(f"Failed to parse cargo metadata output: {e}")

        if not isinstance(data, dict):
            raise ResolutionError("cargo metadata output is not a JSON object")

        try:
            return MetadataSnapshot.from_json(data)
        except ValidationError as e:
            raise ResolutionError(f"Unexpected cargo metadata format: {e}")

"""
Read-only metadata queries backing the MCP tools.

Each query resolves the (cached) snapshot, projects the slice it serves,
and renders it as pretty-printed JSON. Failures come back as a failed
QueryResult; they never escape the query and never touch cache state.
"""

import json
import logging
from typing import Any, Callable, List

from .errors import MetadataError, MissingDataError, QueryResult, SerializationError
from .metadata_cache import MetadataCache
from .models import DependencyInfo, MetadataSnapshot, Package, PackageInfo

logger = logging.getLogger(__name__)


def resolve_dependencies(package: Package, snapshot: MetadataSnapshot) -> List[DependencyInfo]:
    """
    Summarize a package's declared dependencies.

    The version is taken from the same-named package in the resolved
    package set when there is one, falling back to the requirement string.
    """
    dependencies = []
    for dep in package.dependencies:
        resolved = snapshot.find_package_by_name(dep.name)
        version = resolved.version if resolved is not None else dep.req
        dependencies.append(
            DependencyInfo(
                name=dep.name,
                version=version,
                optional=dep.optional,
                features=list(dep.features),
            )
        )
    return dependencies


def _require_root(snapshot: MetadataSnapshot) -> Package:
    root = snapshot.root_package()
    if root is None:
        raise MissingDataError()
    return root


def _to_json(value: Any, what: str) -> str:
    try:
        return json.dumps(value, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to serialize {what}: {e}")


class MetadataQueries:
    """The six metadata queries exposed over MCP."""

    def __init__(self, cache: MetadataCache):
        self.cache = cache

    def _run(
        self, name: str, manifest_path: str, project: Callable[[MetadataSnapshot], str]
    ) -> QueryResult:
        try:
            payload = self.cache.snapshot_for(manifest_path, project)
        except MetadataError as e:
            logger.warning("%s failed (%s): %s", name, e.kind.value, e.message)
            return QueryResult.fail(e)
        return QueryResult.ok(payload)

    def get_metadata(self, manifest_path: str) -> QueryResult:
        """Full cargo metadata document, verbatim."""
        return self._run(
            "get_metadata",
            manifest_path,
            lambda snapshot: _to_json(snapshot.raw, "metadata"),
        )

    def get_package_info(self, manifest_path: str) -> QueryResult:
        """Summary of the root package with resolved dependency versions."""

        def project(snapshot: MetadataSnapshot) -> str:
            root = _require_root(snapshot)
            info = PackageInfo(
                name=root.name,
                version=root.version,
                authors=list(root.authors),
                description=root.description,
                repository=root.repository,
                license=root.license,
                dependencies=resolve_dependencies(root, snapshot),
            )
            return _to_json(info.model_dump(mode="json"), "package info")

        return self._run("get_package_info", manifest_path, project)

    def get_dependencies(self, manifest_path: str) -> QueryResult:
        def project(snapshot: MetadataSnapshot) -> str:
            root = _require_root(snapshot)
            dependencies = resolve_dependencies(root, snapshot)
            return _to_json(
                [dep.model_dump(mode="json") for dep in dependencies], "dependencies"
            )

        return self._run("get_dependencies", manifest_path, project)

    def get_targets(self, manifest_path: str) -> QueryResult:
        return self._run(
            "get_targets",
            manifest_path,
            lambda snapshot: _to_json(_require_root(snapshot).targets, "targets"),
        )

    def get_workspace_info(self, manifest_path: str) -> QueryResult:
        """Workspace member packages in declared order."""
        return self._run(
            "get_workspace_info",
            manifest_path,
            lambda snapshot: _to_json(
                [package.to_json_dict() for package in snapshot.workspace_packages()],
                "workspace members",
            ),
        )

    def get_features(self, manifest_path: str) -> QueryResult:
        return self._run(
            "get_features",
            manifest_path,
            lambda snapshot: _to_json(_require_root(snapshot).features, "features"),
        )

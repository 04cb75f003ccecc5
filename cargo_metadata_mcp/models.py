"""Pydantic models for `cargo metadata --format-version 1` output and its projections."""

import os
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Dependency(BaseModel):
    """A dependency edge declared in a package manifest."""

    model_config = ConfigDict(extra="allow")

    name: str
    req: str = "*"
    kind: Optional[str] = None  # None (normal), "dev" or "build"
    optional: bool = False
    uses_default_features: bool = True
    features: List[str] = Field(default_factory=list)
    rename: Optional[str] = None
    source: Optional[str] = None
    target: Optional[str] = None


class Package(BaseModel):
    """A package from the resolved package set. Unknown keys are preserved."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    version: str
    authors: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    repository: Optional[str] = None
    license: Optional[str] = None
    manifest_path: Optional[str] = None
    dependencies: List[Dependency] = Field(default_factory=list)
    targets: List[Dict[str, Any]] = Field(default_factory=list)
    features: Dict[str, List[str]] = Field(default_factory=dict)

    def to_json_dict(self) -> Dict[str, Any]:
        """Round-trip the package as it appeared in cargo's output."""
        return self.model_dump(mode="json")


class Resolve(BaseModel):
    """The `resolve` section (absent with --no-deps)."""

    model_config = ConfigDict(extra="allow")

    root: Optional[str] = None
    nodes: List[Dict[str, Any]] = Field(default_factory=list)


class MetadataSnapshot(BaseModel):
    """
    Parsed output of `cargo metadata` for one manifest.

    `raw` keeps the document exactly as cargo produced it; the typed
    fields are views over the same data.
    """

    packages: List[Package] = Field(default_factory=list)
    workspace_members: List[str] = Field(default_factory=list)
    workspace_root: Optional[str] = None
    target_directory: Optional[str] = None
    resolve: Optional[Resolve] = None
    version: int = 1
    raw: Dict[str, Any] = Field(default_factory=dict, exclude=True)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "MetadataSnapshot":
        """Build a snapshot from decoded cargo metadata JSON."""
        known = {k: v for k, v in data.items() if k in cls.model_fields and k != "raw"}
        return cls(**known, raw=data)

    def find_package(self, package_id: str) -> Optional[Package]:
        for package in self.packages:
            if package.id == package_id:
                return package
        return None

    def find_package_by_name(self, name: str) -> Optional[Package]:
        for package in self.packages:
            if package.name == name:
                return package
        return None

    def root_package(self) -> Optional[Package]:
        """
        Locate the package whose manifest produced this snapshot.

        Uses `resolve.root` when the resolve graph is present, otherwise
        matches the package living at the workspace root. Returns None for
        virtual workspaces.
        """
        if self.resolve is not None:
            if self.resolve.root is None:
                return None
            return self.find_package(self.resolve.root)

        if not self.workspace_root:
            return None

        root_manifest = os.path.join(self.workspace_root, "Cargo.toml")
        for package in self.packages:
            if package.manifest_path == root_manifest:
                return package
        return None

    def workspace_packages(self) -> List[Package]:
        """Workspace members in declared order, skipping ids with no package."""
        members = []
        for member_id in self.workspace_members:
            package = self.find_package(member_id)
            if package is not None:
                members.append(package)
        return members


class DependencyInfo(BaseModel):
    """Dependency summary returned by get_dependencies/get_package_info."""

    name: str
    version: str
    optional: bool
    features: List[str]


class PackageInfo(BaseModel):
    """Package summary returned by get_package_info."""

    name: str
    version: str
    authors: List[str]
    description: Optional[str] = None
    repository: Optional[str] = None
    license: Optional[str] = None
    dependencies: List[DependencyInfo]

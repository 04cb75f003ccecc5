"""Shared test helpers: cargo metadata builders and a fake resolver."""

import copy
import threading
import time

from cargo_metadata_mcp.errors import ResolutionError
from cargo_metadata_mcp.models import MetadataSnapshot

APP_ID = "path+file:///work/app#0.1.0"
LIB_ID = "path+file:///work/app/crates/lib#lib@0.2.0"
GHOST_ID = "path+file:///work/app/crates/ghost#0.0.1"
RESOLVED_ID = "registry+https://github.com/rust-lang/crates.io-index#resolved-crate@1.2.3"


def make_package(package_id, name, version, manifest_path, **fields):
    """Build a package entry shaped like cargo metadata output."""
    package = {
        "name": name,
        "version": version,
        "id": package_id,
        "license": None,
        "license_file": None,
        "description": None,
        "source": None,
        "dependencies": [],
        "targets": [],
        "features": {},
        "manifest_path": manifest_path,
        "metadata": None,
        "publish": None,
        "authors": [],
        "categories": [],
        "keywords": [],
        "readme": None,
        "repository": None,
        "homepage": None,
        "documentation": None,
        "edition": "2021",
        "links": None,
        "default_run": None,
        "rust_version": None,
    }
    package.update(fields)
    return package


def make_dependency(name, req, optional=False, features=None, kind=None):
    return {
        "name": name,
        "source": "registry+https://github.com/rust-lang/crates.io-index",
        "req": req,
        "kind": kind,
        "rename": None,
        "optional": optional,
        "uses_default_features": True,
        "features": features or [],
        "target": None,
        "registry": None,
    }


class FakeResolver:
    """Stands in for cargo: serves canned metadata per manifest path."""

    def __init__(self, responses=None, default=None, delay=0.0):
        self.responses = responses or {}
        self.default = default
        self.delay = delay
        self.calls = []
        self._calls_lock = threading.Lock()

    def __call__(self, manifest_path):
        with self._calls_lock:
            self.calls.append(manifest_path)
        if self.delay:
            time.sleep(self.delay)

        response = self.responses.get(manifest_path, self.default)
        if response is None:
            raise ResolutionError(f"could not find `Cargo.toml` at `{manifest_path}`")
        if isinstance(response, Exception):
            raise response
        return MetadataSnapshot.from_json(copy.deepcopy(response))



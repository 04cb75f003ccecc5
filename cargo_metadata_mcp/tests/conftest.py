"""Shared test fixtures for cargo_metadata_mcp tests."""

import sys
from pathlib import Path

import pytest

# Add tests directory to path for helper imports
sys.path.insert(0, str(Path(__file__).parent))

from helpers import APP_ID, GHOST_ID, LIB_ID, RESOLVED_ID, make_dependency, make_package


@pytest.fixture
def app_metadata():
    """Metadata for a workspace whose root manifest is also a package."""
    app = make_package(
        APP_ID,
        "app",
        "0.1.0",
        "/work/app/Cargo.toml",
        authors=["Jane Doe <jane@example.com>"],
        description="Sample application",
        repository="https://github.com/example/app",
        license="MIT OR Apache-2.0",
        dependencies=[
            make_dependency("resolved-crate", "^1.0", features=["derive"]),
            make_dependency("missing-crate", "^1.0", optional=True),
            make_dependency("lib", "^0.2"),
        ],
        targets=[
            {
                "kind": ["bin"],
                "crate_types": ["bin"],
                "name": "app",
                "src_path": "/work/app/src/main.rs",
                "edition": "2021",
                "doc": True,
                "doctest": False,
                "test": True,
            }
        ],
        features={"default": ["fast"], "fast": [], "extra": ["dep:missing-crate"]},
    )
    lib = make_package(
        LIB_ID,
        "lib",
        "0.2.0",
        "/work/app/crates/lib/Cargo.toml",
        targets=[
            {
                "kind": ["lib"],
                "crate_types": ["lib"],
                "name": "lib",
                "src_path": "/work/app/crates/lib/src/lib.rs",
                "edition": "2021",
                "doc": True,
                "doctest": True,
                "test": True,
            }
        ],
    )
    resolved = make_package(
        RESOLVED_ID,
        "resolved-crate",
        "1.2.3",
        "/home/user/.cargo/registry/src/resolved-crate-1.2.3/Cargo.toml",
        source="registry+https://github.com/rust-lang/crates.io-index",
    )
    return {
        "packages": [app, lib, resolved],
        "workspace_members": [APP_ID, GHOST_ID, LIB_ID],
        "workspace_default_members": [APP_ID],
        "resolve": {"nodes": [], "root": APP_ID},
        "target_directory": "/work/app/target",
        "version": 1,
        "workspace_root": "/work/app",
        "metadata": None,
    }


@pytest.fixture
def virtual_workspace_metadata():
    """Metadata for a virtual workspace: members but no root package."""
    lib = make_package(LIB_ID, "lib", "0.2.0", "/work/app/crates/lib/Cargo.toml")
    tool = make_package(
        "path+file:///work/app/crates/tool#0.3.0",
        "tool",
        "0.3.0",
        "/work/app/crates/tool/Cargo.toml",
    )
    return {
        "packages": [lib, tool],
        "workspace_members": [LIB_ID, "path+file:///work/app/crates/tool#0.3.0"],
        "resolve": {"nodes": [], "root": None},
        "target_directory": "/work/app/target",
        "version": 1,
        "workspace_root": "/work/app",
        "metadata": None,
    }


@pytest.fixture
def other_metadata():
    """Metadata for a second, unrelated project."""
    other_id = "path+file:///work/other#9.9.9"
    other = make_package(other_id, "other", "9.9.9", "/work/other/Cargo.toml")
    return {
        "packages": [other],
        "workspace_members": [other_id],
        "resolve": {"nodes": [], "root": other_id},
        "target_directory": "/work/other/target",
        "version": 1,
        "workspace_root": "/work/other",
        "metadata": None,
    }

"""Shared fixtures: a fake installed Tailwind package in a temporary project."""

import json
from unittest.mock import MagicMock

import pytest

from tailwindcss_patch.core.runtime import NodeBridge


def write_package(project_dir, name="tailwindcss", version="3.4.1", files=None):
    """Create ``node_modules/<name>`` with a package.json and optional files."""
    package_dir = project_dir / "node_modules"
    for part in name.split("/"):
        package_dir = package_dir / part
    package_dir.mkdir(parents=True, exist_ok=True)
    (package_dir / "package.json").write_text(
        json.dumps({"name": name, "version": version}), encoding="utf-8"
    )
    for relative_path, content in (files or {}).items():
        target = package_dir / relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return package_dir


@pytest.fixture
def project(tmp_path):
    """Project directory with tailwindcss 3.4.1 installed."""
    write_package(tmp_path)
    return tmp_path


@pytest.fixture
def bridge():
    """NodeBridge double; set ``bridge.run_script.return_value`` per test."""
    return MagicMock(spec=NodeBridge)


@pytest.fixture
def package_factory():
    """``write_package`` as a fixture for tests that need extra packages."""
    return write_package

"""Unit tests for the project metadata."""

from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")

ROOT = Path(__file__).resolve().parents[2]


def test_readme_points_at_an_existing_file():
    project = tomllib.loads((ROOT / "pyproject.toml").read_text())["project"]
    readme = project.get("readme")
    if readme is not None:
        assert (ROOT / readme).is_file()


def test_runtime_dependencies_declared():
    names = {dep.split(">")[0].split("=")[0] for dep in
             tomllib.loads((ROOT / "pyproject.toml").read_text())["project"]["dependencies"]}
    assert {"pydantic", "pydantic-settings", "opentelemetry-api", "azure-cosmos", "azure-identity"} <= names

"""Pytest configuration and shared fixtures."""

import pytest
from pathlib import Path

from weavedoc.parser.assembler import DataWeaveParser


@pytest.fixture(scope="session")
def fixtures_path():
    """Path to test fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def dwl_dir(fixtures_path):
    """Directory of sample DataWeave sources."""
    return fixtures_path / "dwl"


@pytest.fixture(scope="session")
def main_text(dwl_dir):
    """Script with header, declarations and a body."""
    return (dwl_dir / "main.dwl").read_text(encoding="utf-8")


@pytest.fixture(scope="session")
def utils_text(dwl_dir):
    """Module without a body."""
    return (dwl_dir / "modules" / "Utils.dwl").read_text(encoding="utf-8")


@pytest.fixture
def parser():
    """Create a parser instance."""
    return DataWeaveParser()


@pytest.fixture
def project_dir(tmp_path, dwl_dir):
    """Temporary project with the sample sources under src/main/resources/dwl."""
    target = tmp_path / "src" / "main" / "resources" / "dwl"
    target.mkdir(parents=True)
    for source in dwl_dir.rglob("*"):
        if source.is_file():
            dest = target / source.relative_to(dwl_dir)
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_text(source.read_text(encoding="utf-8"), encoding="utf-8")
    return tmp_path

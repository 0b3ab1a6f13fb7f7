"""Pytest configuration for nsloader tests."""

import sys
from pathlib import Path

import pytest

# Allow running the suite from a checkout without installing the package
repo_root = Path(__file__).parent.parent
sys.path.insert(0, str(repo_root))

from nsloader import AutoLoader  # noqa: E402
from nsloader import LoaderConfig  # noqa: E402


@pytest.fixture
def make_file(tmp_path: Path):
    """Create a file (and its parents) below tmp_path."""

    def _make(relative: str, content: str = "") -> Path:
        target = tmp_path / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
        return target.resolve()

    return _make


@pytest.fixture
def loader(tmp_path: Path) -> AutoLoader:
    """Loader anchored to tmp_path with default options."""
    return AutoLoader(config=LoaderConfig(base_path=tmp_path))

# conftest.py - shared fixtures
import pytest


@pytest.fixture
def roots(tmp_path):
    """A (workspace, shelf) pair of empty directories."""
    workspace = tmp_path / "workspace"
    shelf = tmp_path / "shelf"
    workspace.mkdir()
    shelf.mkdir()
    return workspace, shelf


@pytest.fixture
def put():
    """Write bytes or text to root/rel, creating parent directories."""

    def _put(root, rel, content):
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            content = content.encode("utf-8")
        target.write_bytes(content)
        return target

    return _put

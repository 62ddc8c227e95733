# ABOUTME: Shared fixtures for sitehooks tests
# ABOUTME: Builds a throwaway project tree with a web root and profile assets
from pathlib import Path

import pytest

from sitehooks.config import HooksConfig
from sitehooks.models import BufferedIO, HookEvent


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Project root with an empty web/ directory."""
    (tmp_path / "web").mkdir()
    return tmp_path


@pytest.fixture
def web_root(project_root: Path) -> Path:
    return project_root / "web"


@pytest.fixture
def assets_dir(web_root: Path) -> Path:
    """Template directory of the default profile."""
    path = web_root / "profiles" / "greencko" / "src" / "assets"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def make_event(project_root: Path):
    """Factory for HookEvents writing into a BufferedIO."""

    def _make(name: str = "test", config: HooksConfig | None = None, **kwargs) -> HookEvent:
        return HookEvent(
            name=name,
            project_root=project_root,
            io=BufferedIO(),
            config=config or HooksConfig(),
            **kwargs,
        )

    return _make

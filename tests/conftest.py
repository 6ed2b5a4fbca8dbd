# tests/conftest.py

"""Shared pytest fixtures for all storefront tests."""

from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest

from storefront.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_paths(tmp_path: Path) -> Generator[None, None, None]:
    """Point log and data directories at a per-test temp dir."""
    with patch.object(Settings, "LOGS_DIR", tmp_path / "logs"), \
            patch.object(Settings, "DATA_DIR", tmp_path / "data"), \
            patch.object(
                Settings, "AUTH_DB_PATH", tmp_path / "data" / "auth.db"
            ):
        yield

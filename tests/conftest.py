# tests/conftest.py
import pytest
from unittest.mock import MagicMock
from pathlib import Path

from gdshare.config import Settings, get_settings
from gdshare.storage.base import StorageClient


@pytest.fixture
def mock_settings():
    """
    Provides a mock of the application settings for testing.
    This avoids the need for environment variables during tests.
    """
    settings = MagicMock(spec=Settings)
    settings.LOG_LEVEL = "INFO"
    settings.GDRIVE_FOLDER_ID = "folder_id"
    settings.GDRIVE_CREDENTIALS_FILE = "credentials.json"
    settings.GDRIVE_TOKEN_FILE = "token.json"
    settings.GDRIVE_SCOPES = ["https://www.googleapis.com/auth/drive"]
    settings.MAX_AGE_DAYS = 30
    settings.LIST_PAGE_SIZE = 10
    settings.UPLOAD_DESCRIPTION = "Uploaded with gdshare"
    settings.BASE_DIR = Path("/tmp")
    settings.CREDENTIALS_PATH = Path("/tmp/credentials.json")
    settings.TOKEN_PATH = Path("/tmp/token.json")
    settings.LOG_FILE = Path("/tmp/gdshare.log")
    return settings


@pytest.fixture
def mock_storage_client():
    """Fixture for a mock storage client."""
    return MagicMock(spec=StorageClient)


@pytest.fixture(autouse=True)
def patch_settings_class(monkeypatch, mock_settings):
    """
    Replaces the `Settings` constructor so any `get_settings()` call during a
    test receives `mock_settings` instead of reading the real environment.
    Tests that import `Settings` directly still get the real class.
    """
    get_settings.cache_clear()
    monkeypatch.setattr("gdshare.config.Settings", lambda *args, **kwargs: mock_settings)
    yield
    get_settings.cache_clear()

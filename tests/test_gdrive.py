# tests/test_gdrive.py
import pytest
from datetime import datetime, timezone
from unittest.mock import patch, MagicMock
from googleapiclient.errors import HttpError

from gdshare.gdrive import GoogleDriveClient


def http_error(status):
    return HttpError(
        resp=MagicMock(status=status),
        content=b'{"error": {"message": "Something went wrong"}}',
    )


@patch("gdshare.gdrive.build")
def test_gdrive_client_init_success(MockBuild):
    """Test successful initialization of GoogleDriveClient."""
    credentials = MagicMock(valid=True)

    client = GoogleDriveClient(credentials)

    MockBuild.assert_called_once_with("drive", "v3", credentials=credentials)
    assert client.service == MockBuild.return_value


@patch("gdshare.gdrive.build", side_effect=Exception("Discovery failed"))
def test_gdrive_client_init_failure(MockBuild):
    """Test failed initialization of GoogleDriveClient."""
    with pytest.raises(Exception, match="Discovery failed"):
        GoogleDriveClient(MagicMock())


@pytest.fixture
def client():
    """Fixture to create a GoogleDriveClient instance with a mocked Drive service."""
    with patch("gdshare.gdrive.build") as MockBuild:
        MockBuild.return_value = MagicMock()
        yield GoogleDriveClient(MagicMock(valid=True))


@pytest.fixture
def files_resource(client):
    """The mocked `service.files()` resource, reached without recording extra calls."""
    return client.service.files.return_value


def test_list_files_with_query(client, files_resource):
    """Test listing files with a query and explicit fields."""
    files_resource.list.return_value.execute.return_value = {
        "files": [{"id": "file_id", "name": "test.pdf"}]
    }

    files = client.list_files(
        query="'folder_id' in parents", page_size=1000, fields="id, name"
    )

    files_resource.list.assert_called_once_with(
        pageSize=1000, fields="files(id, name)", q="'folder_id' in parents"
    )
    assert len(files) == 1
    assert files[0].id == "file_id"
    assert files[0].name == "test.pdf"


def test_list_files_without_query_lists_everything(client, files_resource):
    files_resource.list.return_value.execute.return_value = {"files": []}

    files = client.list_files(page_size=10)

    assert files == []
    _, kwargs = files_resource.list.call_args
    assert "q" not in kwargs
    assert kwargs["pageSize"] == 10


def test_list_files_converts_api_fields(client, files_resource):
    files_resource.list.return_value.execute.return_value = {
        "files": [
            {
                "id": "file_id",
                "name": "photo.png",
                "mimeType": "image/png",
                "size": "2048",
                "createdTime": "2024-03-01T10:15:00.000Z",
                "parents": ["folder_id"],
            }
        ]
    }

    remote_file = client.list_files()[0]

    assert remote_file.mime_type == "image/png"
    assert remote_file.size == 2048
    assert remote_file.created_time == datetime(2024, 3, 1, 10, 15, tzinfo=timezone.utc)
    assert remote_file.parent_folder_id == "folder_id"


def test_list_files_http_error_is_raised(client, files_resource):
    files_resource.list.return_value.execute.side_effect = http_error(500)

    with pytest.raises(HttpError):
        client.list_files()


def test_get_file_success(client, files_resource):
    files_resource.get.return_value.execute.return_value = {
        "id": "file_id",
        "name": "notes.txt",
    }

    remote_file = client.get_file("file_id", fields="id, name")

    files_resource.get.assert_called_once_with(fileId="file_id", fields="id, name")
    assert remote_file.name == "notes.txt"


def test_get_file_not_found(client, files_resource):
    """A 404 from the API becomes a FileNotFoundError."""
    files_resource.get.return_value.execute.side_effect = http_error(404)

    with pytest.raises(FileNotFoundError, match="not found"):
        client.get_file("missing_id")


@patch("gdshare.gdrive.MediaIoBaseUpload")
def test_create_file_success(MockMediaIoBaseUpload, client, files_resource):
    """Test uploading content and waiting for the resumable upload to finish."""
    request = files_resource.create.return_value
    progress = MagicMock()
    progress.progress.return_value = 0.5
    request.next_chunk.side_effect = [
        (progress, None),
        (None, {"id": "new_id", "webViewLink": "https://drive.example/view?usp=drivesdk"}),
    ]
    metadata = {"name": "test.pdf", "parents": ["folder_id"]}

    created = client.create_file(metadata, b"content", "application/pdf")

    files_resource.create.assert_called_once_with(
        body=metadata,
        media_body=MockMediaIoBaseUpload.return_value,
        fields="id, webViewLink",
        supportsAllDrives=True,
    )
    _, media_kwargs = MockMediaIoBaseUpload.call_args
    assert media_kwargs == {"mimetype": "application/pdf", "resumable": True}
    assert request.next_chunk.call_count == 2
    assert created.id == "new_id"
    assert created.web_view_link == "https://drive.example/view?usp=drivesdk"


@patch("gdshare.gdrive.MediaIoBaseUpload")
def test_create_file_http_error_is_raised(MockMediaIoBaseUpload, client, files_resource):
    files_resource.create.return_value.next_chunk.side_effect = http_error(403)

    with pytest.raises(HttpError):
        client.create_file({"name": "test.pdf"}, b"content", "application/pdf")


def test_delete_file_success(client, files_resource):
    """Test deleting a file successfully."""
    assert client.delete_file("file_id") is True

    files_resource.delete.assert_called_once_with(fileId="file_id")
    files_resource.delete.return_value.execute.assert_called_once()


def test_delete_file_not_found_is_ignored(client, files_resource):
    files_resource.delete.return_value.execute.side_effect = http_error(404)

    assert client.delete_file("file_id") is False


def test_delete_file_other_error_is_raised(client, files_resource):
    files_resource.delete.return_value.execute.side_effect = http_error(500)

    with pytest.raises(HttpError):
        client.delete_file("file_id")

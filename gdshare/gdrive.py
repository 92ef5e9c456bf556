# gdrive.py
import logging
import io

from .storage.base import StorageClient, DEFAULT_FILE_FIELDS
from .storage.dto import RemoteFile
from typing import List, Optional
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseUpload

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"


class GoogleDriveClient(StorageClient):
    """
    Client for interacting with the Google Drive API, implementing the StorageClient interface.
    """

    def __init__(self, credentials):
        try:
            self.service = build("drive", "v3", credentials=credentials)
            logging.info("Google Drive client initialized successfully.")
        except Exception as e:
            logging.error(f"Failed to initialize Google Drive client. Error: {e}")
            raise

    def list_files(
        self,
        query: Optional[str] = None,
        page_size: int = 100,
        fields: str = DEFAULT_FILE_FIELDS,
    ) -> List[RemoteFile]:
        """
        Lists a single page of files matching the query and returns them as DTOs.
        Only the first page is fetched; the API caps page_size at 1000.
        """
        params = {"pageSize": page_size, "fields": f"files({fields})"}
        if query:
            params["q"] = query
        try:
            logging.info(f"Listing up to {page_size} files (query: {query!r})")
            response = self.service.files().list(**params).execute()
        except HttpError as e:
            logging.error(f"Failed to list files with query {query!r}: {e}")
            raise

        files = response.get("files", [])
        return [RemoteFile.model_validate(item) for item in files]

    def get_file(self, file_id: str, fields: str = DEFAULT_FILE_FIELDS) -> RemoteFile:
        """
        Retrieves a single file's metadata by its file ID.
        """
        try:
            item = self.service.files().get(fileId=file_id, fields=fields).execute()
            return RemoteFile.model_validate(item)
        except HttpError as e:
            if e.resp.status == 404:
                raise FileNotFoundError(
                    f"File with ID '{file_id}' not found in Google Drive."
                ) from e
            logging.error(f"Failed to get file with ID '{file_id}': {e}")
            raise

    def create_file(self, metadata: dict, content: bytes, mime_type: str) -> RemoteFile:
        """
        Uploads in-memory content as a new Google Drive file.
        Blocks until the resumable upload reports completion.
        """
        name = metadata.get("name")
        try:
            media = MediaIoBaseUpload(
                io.BytesIO(content), mimetype=mime_type, resumable=True
            )
            request = self.service.files().create(
                body=metadata,
                media_body=media,
                fields="id, webViewLink",
                supportsAllDrives=True,
            )

            logging.info(f"Uploading {name} ({len(content)} bytes, {mime_type})...")
            response = None
            while response is None:
                status, response = request.next_chunk()
                if status:
                    logging.debug(f"Uploaded {int(status.progress() * 100)}% of {name}")
            logging.info(f"Successfully uploaded {name} with ID: {response.get('id')}.")
            return RemoteFile.model_validate(response)
        except HttpError as e:
            logging.error(f"Failed to upload file '{name}': {e}")
            raise

    def delete_file(self, file_id: str) -> bool:
        """
        Deletes a file from Google Drive by its file ID.
        """
        try:
            logging.info(f"Deleting file with ID '{file_id}'...")
            self.service.files().delete(fileId=file_id).execute()
            return True
        except HttpError as e:
            if e.resp.status == 404:
                logging.warning(
                    f"File with ID '{file_id}' not found. Nothing to delete."
                )
                return False
            else:
                logging.error(f"Failed to delete file with ID '{file_id}': {e}")
                raise

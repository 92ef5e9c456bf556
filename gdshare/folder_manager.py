import logging
import os
from datetime import date, datetime, timezone
from typing import Callable, Optional

from .gdrive import FOLDER_MIME_TYPE
from .mime_types import guess_mime_type
from .storage.base import StorageClient
from .storage.dto import RemoteFile

FOLDER_NOT_FOUND = "NONE FOUND"
FILE_NOT_FOUND_MESSAGE = "ERROR: The file does not exist."
DEFAULT_MAX_DAYS = 30
FOLDER_PAGE_SIZE = 1000
DEFAULT_DESCRIPTION = "Uploaded with gdshare"


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


def _format_created(remote_file: RemoteFile) -> str:
    if remote_file.created_time is None:
        return "-"
    return remote_file.created_time.strftime("%Y-%m-%d %H:%M:%S")


def _format_size_kb(remote_file: RemoteFile) -> str:
    if remote_file.size is None:
        return "-"
    return f"{remote_file.size / 1024:.1f}"


def _describe(remote_file: RemoteFile) -> str:
    return (
        f"{remote_file.name} {remote_file.mime_type} {remote_file.id} "
        f"{_format_created(remote_file)}"
    )


class FolderFileManager:
    """
    Lists, uploads and purges files inside one Google Drive folder.

    Every remote call goes through the injected storage client; the manager
    holds no other state. User-facing operations return plain-text reports and
    turn failures into "ERROR: ..." strings instead of raising.
    """

    def __init__(
        self,
        storage_client: StorageClient,
        folder_id: str,
        today: Optional[Callable[[], date]] = None,
    ):
        self.storage_client = storage_client
        self.folder_id = folder_id
        self.today = today or _utc_today

    def _folder_query(self) -> str:
        return f"'{self.folder_id}' in parents and trashed=false"

    def _list_folder(self):
        return self.storage_client.list_files(
            query=self._folder_query(), page_size=FOLDER_PAGE_SIZE
        )

    def days_old(self, remote_file: RemoteFile) -> Optional[int]:
        """Calendar days between today (UTC) and the file's creation date."""
        created = remote_file.created_time
        if created is None:
            return None
        if created.tzinfo is not None:
            created = created.astimezone(timezone.utc)
        return (self.today() - created.date()).days

    def list_files(self, page_size: int = 10) -> str:
        """
        Reports up to page_size files across the whole drive, not just the folder.
        """
        try:
            files = self.storage_client.list_files(page_size=page_size)
        except Exception as e:
            logging.error(f"Failed to list files: {e}")
            return f"ERROR: Unable to list files.\n{e}"

        lines = ["List of files stored on Google Drive:"]
        if not files:
            lines.append("No files found.")
        for remote_file in files:
            lines.append(
                f"Name: {remote_file.name}\t ID: {remote_file.id}\t "
                f"Size (kB): {_format_size_kb(remote_file)}\t "
                f"Uploaded: {_format_created(remote_file)}"
            )
        return "\n".join(lines)

    def _folders(self):
        return self.storage_client.list_files(
            query=f"mimeType='{FOLDER_MIME_TYPE}' and trashed=false",
            page_size=FOLDER_PAGE_SIZE,
            fields="id, name, mimeType",
        )

    def resolve_folder_name(self, folder_id: Optional[str] = None) -> str:
        """
        Finds the name of a folder by scanning every folder entry for its ID.
        Returns FOLDER_NOT_FOUND when no folder matches.
        """
        folder_id = folder_id or self.folder_id
        for folder in self._folders():
            if folder.id == folder_id:
                return folder.name
        return FOLDER_NOT_FOUND

    def list_folders(self) -> str:
        try:
            folders = self._folders()
        except Exception as e:
            logging.error(f"Failed to list folders: {e}")
            return f"ERROR: Unable to list folders.\n{e}"

        lines = ["Found following folders:"]
        lines.extend(f"{folder.name}\t[ FolderID: {folder.id} ]" for folder in folders)
        return "\n".join(lines)

    def list_folder_contents(self) -> str:
        """Reports name, MIME type, ID and creation time of each file in the folder."""
        try:
            files = self._list_folder()
            folder_name = self.resolve_folder_name()
        except Exception as e:
            logging.error(f"Failed to list folder '{self.folder_id}': {e}")
            return f"ERROR: Unable to list files.\n{e}"

        lines = [f"Found files in folder: {folder_name}"]
        lines.extend(_describe(remote_file) for remote_file in files)
        return "\n".join(lines)

    def describe_file(self, file_id: str) -> str:
        try:
            remote_file = self.storage_client.get_file(file_id, fields="id, name")
        except FileNotFoundError:
            return FILE_NOT_FOUND_MESSAGE
        except Exception as e:
            logging.error(f"Failed to get file '{file_id}': {e}")
            return f"ERROR: Unable to get file.\n{e}"
        return f"File {file_id}: {remote_file.name}"

    def upload_file(self, local_path, description: str = DEFAULT_DESCRIPTION) -> str:
        """
        Uploads a local file into the folder and returns its shareable link
        without the query string.
        """
        local_path = str(local_path)
        if not os.path.isfile(local_path):
            logging.warning(f"Upload skipped, {local_path} does not exist.")
            return FILE_NOT_FOUND_MESSAGE

        mime_type = guess_mime_type(local_path)
        metadata = {
            "name": os.path.basename(local_path),
            "description": description,
            "mimeType": mime_type,
            "parents": [self.folder_id],
        }
        try:
            with open(local_path, "rb") as f:
                content = f.read()
            created = self.storage_client.create_file(metadata, content, mime_type)
            if not created.web_view_link:
                raise ValueError(f"No shareable link returned for file {created.id}.")
        except Exception as e:
            logging.error(f"Failed to upload {local_path}: {e}")
            return f"ERROR: Unable to upload file.\n{e}"

        return created.web_view_link.split("?")[0]

    def delete_file(self, file_id: str) -> str:
        """Deletes one file. Failures are logged and reported, never retried."""
        try:
            deleted = self.storage_client.delete_file(file_id)
        except Exception as e:
            logging.error(f"Failed to delete file '{file_id}': {e}")
            return f"ERROR: Unable to delete file {file_id}.\n{e}"
        if not deleted:
            return f"{file_id} was already gone, nothing deleted."
        logging.info(f"{file_id} deleted successfully.")
        return f"{file_id} deleted successfully."

    def purge_expired_files(self, max_days: int = DEFAULT_MAX_DAYS) -> str:
        """
        Deletes every file in the folder that is max_days or more calendar days old.

        Only the first page of up to FOLDER_PAGE_SIZE files is examined. Each
        file gets its own report block; a failed delete is reported in that
        block and the remaining files are still processed.
        """
        if max_days < 0:
            raise ValueError("max_days must not be negative")

        try:
            files = self._list_folder()
        except Exception as e:
            logging.error(f"Failed to list folder '{self.folder_id}': {e}")
            return f"ERROR: Unable to list files.\n{e}"

        if not files:
            return f"Nothing to purge in folder: {self.folder_id}"

        blocks = []
        for remote_file in files:
            lines = [_describe(remote_file)]
            age = self.days_old(remote_file)
            if age is None:
                lines.append(
                    f"File: {remote_file.name} has no creation date and WILL NOT be deleted"
                )
            elif age >= max_days:
                lines.append(
                    f"File: {remote_file.name} is {age} days old and WILL be deleted"
                )
                lines.append(self.delete_file(remote_file.id))
            else:
                lines.append(
                    f"File: {remote_file.name} is {age} days old and WILL NOT be deleted"
                )
            blocks.append("\n".join(lines))

        return "\n\n".join(blocks) + "\n"

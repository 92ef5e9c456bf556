from abc import ABC, abstractmethod
from typing import List, Optional
from .dto import RemoteFile

DEFAULT_FILE_FIELDS = "id, name, mimeType, size, createdTime, parents"


class StorageClient(ABC):
    """
    Abstract base class for a cloud storage client.
    Defines the four remote operations the folder manager relies on;
    transport details stay inside the concrete client.
    """

    @abstractmethod
    def list_files(
        self,
        query: Optional[str] = None,
        page_size: int = 100,
        fields: str = DEFAULT_FILE_FIELDS,
    ) -> List[RemoteFile]:
        """
        Lists one page of files matching a query.

        :param query: A provider query string, or None for every file.
        :param page_size: The maximum number of files to return.
        :param fields: The file fields to request.
        :return: A list of standardized RemoteFile DTOs.
        """
        pass

    @abstractmethod
    def get_file(self, file_id: str, fields: str = DEFAULT_FILE_FIELDS) -> RemoteFile:
        """
        Retrieves the metadata of a single file.

        :param file_id: The ID of the file.
        :param fields: The file fields to request.
        """
        pass

    @abstractmethod
    def create_file(self, metadata: dict, content: bytes, mime_type: str) -> RemoteFile:
        """
        Uploads content as a new file and blocks until the upload completes.

        :param metadata: File metadata (name, description, mimeType, parents).
        :param content: The complete file content.
        :param mime_type: The MIME type of the content.
        :return: The created file, including its shareable link.
        """
        pass

    @abstractmethod
    def delete_file(self, file_id: str) -> bool:
        """
        Deletes a file from the storage.

        :param file_id: The ID of the file to delete.
        :return: True if the file was deleted, False if it no longer existed.
        """
        pass

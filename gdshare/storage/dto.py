from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class RemoteFile(BaseModel):
    """
    A standardized Data Transfer Object for a file stored on the remote service.
    Built straight from the raw API dictionary, so field aliases follow the
    Google Drive v3 names (mimeType, createdTime, webViewLink).
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    mime_type: str = Field("", alias="mimeType")
    size: Optional[int] = None
    created_time: Optional[datetime] = Field(None, alias="createdTime")
    parents: List[str] = Field(default_factory=list)
    web_view_link: Optional[str] = Field(None, alias="webViewLink")
    description: Optional[str] = None

    @property
    def parent_folder_id(self) -> Optional[str]:
        return self.parents[0] if self.parents else None

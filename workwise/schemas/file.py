from datetime import datetime
from typing import List, Optional

from workwise.schemas.base import CamelModel


class FileUrlData(CamelModel):
    file_url: str


class FileUrlResponse(CamelModel):
    success: bool = True
    data: FileUrlData


class UserFileData(CamelModel):
    id: int
    file_name: str
    file_url: str
    file_type: str
    upload_date: Optional[datetime] = None


class UserFileResponse(CamelModel):
    success: bool = True
    data: UserFileData


class UserFileListResponse(CamelModel):
    success: bool = True
    data: List[UserFileData]


class FileDeletedData(CamelModel):
    deleted: bool


class FileDeletedResponse(CamelModel):
    success: bool = True
    data: FileDeletedData

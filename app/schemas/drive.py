from typing import Optional

from app.schemas.base import CamelModel
from app.schemas.budget import Budget


class AuthUrlRead(CamelModel):
    auth_url: str


class DriveUploadRequest(CamelModel):
    budget: Budget


class DriveFileRead(CamelModel):
    id: str
    name: Optional[str] = None
    web_view_link: Optional[str] = None


class DriveUploadRead(CamelModel):
    success: bool
    file: DriveFileRead

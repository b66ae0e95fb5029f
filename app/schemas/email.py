from typing import Optional

from pydantic import EmailStr

from app.schemas.base import CamelModel
from app.schemas.budget import Budget


class EmailReport(CamelModel):
    email: EmailStr
    budget: Budget


class EmailReportRead(CamelModel):
    success: bool
    message: str
    preview_url: Optional[str] = None

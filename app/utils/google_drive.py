# app/utils/google_drive.py

import json
import logging
import uuid
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx

from app.core.config import Settings

logger = logging.getLogger(__name__)

AUTH_ENDPOINT = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_ENDPOINT = "https://oauth2.googleapis.com/token"
UPLOAD_ENDPOINT = "https://www.googleapis.com/upload/drive/v3/files"
DRIVE_FILE_SCOPE = "https://www.googleapis.com/auth/drive.file"


class DriveError(Exception):
    """Google rejected a request; the message carries Google's own error text."""


def _error_message(r: httpx.Response) -> str:
    try:
        data = r.json()
    except ValueError:
        return f"HTTP {r.status_code}: {r.text}"

    error = data.get("error")
    # OAuth: {"error": "invalid_grant", "error_description": "..."}
    if isinstance(error, str):
        description = data.get("error_description")
        return f"{error}: {description}" if description else error
    # Drive: {"error": {"code": 401, "message": "Invalid Credentials", ...}}
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    return f"HTTP {r.status_code}: {r.text}"


class GoogleDriveClient:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.settings.http_timeout_seconds, transport=self.transport)

    def auth_url(self) -> str:
        params = {
            "client_id": self.settings.google_client_id,
            "redirect_uri": self.settings.google_redirect_uri,
            "response_type": "code",
            "scope": DRIVE_FILE_SCOPE,
            "access_type": "offline",
        }
        return f"{AUTH_ENDPOINT}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> Dict[str, Any]:
        data = {
            "code": code,
            "client_id": self.settings.google_client_id,
            "client_secret": self.settings.google_client_secret,
            "redirect_uri": self.settings.google_redirect_uri,
            "grant_type": "authorization_code",
        }
        async with self._client() as client:
            r = await client.post(TOKEN_ENDPOINT, data=data)
        if r.status_code != 200:
            raise DriveError(_error_message(r))
        return r.json()

    async def upload(self, filename: str, mime_type: str, content: bytes, tokens: Dict[str, Any]) -> Dict[str, Any]:
        """Multipart upload; returns the file's id, name and webViewLink."""
        access_token = tokens.get("access_token")
        if not access_token:
            raise DriveError("Invalid Credentials: no access token")

        boundary = uuid.uuid4().hex
        metadata = json.dumps({"name": filename, "mimeType": mime_type}).encode()
        body = b"".join([
            f"--{boundary}\r\nContent-Type: application/json; charset=UTF-8\r\n\r\n".encode(),
            metadata,
            f"\r\n--{boundary}\r\nContent-Type: {mime_type}\r\n\r\n".encode(),
            content,
            f"\r\n--{boundary}--\r\n".encode(),
        ])
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": f"multipart/related; boundary={boundary}",
        }
        params = {"uploadType": "multipart", "fields": "id,name,webViewLink"}

        async with self._client() as client:
            r = await client.post(UPLOAD_ENDPOINT, params=params, headers=headers, content=body)
        if r.status_code not in (200, 201):
            message = _error_message(r)
            logger.error("Error uploading to Google Drive: %s", message)
            raise DriveError(message)
        return r.json()

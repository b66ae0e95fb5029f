import logging
from datetime import datetime
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse

from app.api.deps import get_drive_client, get_token_store
from app.core.tokens import TokenStore
from app.schemas.drive import AuthUrlRead, DriveFileRead, DriveUploadRead, DriveUploadRequest
from app.utils.budget_calculator import calculate_budget
from app.utils.google_drive import DriveError, GoogleDriveClient
from app.utils.report import REPORT_MIME_TYPE, render_text_report, report_filename

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/google", tags=["google"])

# Google's wording for revoked or expired credentials
EXPIRED_MARKERS = ("invalid_grant", "Invalid Credentials")


def _auth_required(drive: GoogleDriveClient, detail: str) -> JSONResponse:
    return JSONResponse(status_code=401, content={"detail": detail, "authUrl": drive.auth_url()})


@router.get("/auth", response_model=AuthUrlRead)
def google_auth(drive: GoogleDriveClient = Depends(get_drive_client)):
    try:
        return AuthUrlRead(auth_url=drive.auth_url())
    except Exception:
        logger.exception("Google Auth URL generation error")
        raise HTTPException(status_code=500, detail="Failed to generate Google Auth URL")


@router.get("/oauth2callback")
async def oauth2_callback(
    code: Optional[str] = Query(None),
    drive: GoogleDriveClient = Depends(get_drive_client),
    token_store: TokenStore = Depends(get_token_store),
):
    if not code:
        raise HTTPException(status_code=400, detail="Authorization code is missing")

    try:
        tokens = await drive.exchange_code(code)
    except httpx.TimeoutException:
        logger.warning("Google token exchange timed out")
        return JSONResponse(
            status_code=504,
            content={"detail": "Google did not respond in time, please try again", "retryable": True},
        )
    except Exception:
        logger.exception("Google OAuth callback error")
        raise HTTPException(status_code=500, detail="Failed to complete Google OAuth flow")

    response = RedirectResponse(url="/", status_code=302)
    token_store.save(response, tokens)
    return response


@router.post("/upload", response_model=DriveUploadRead)
async def upload(
    payload: DriveUploadRequest,
    request: Request,
    drive: GoogleDriveClient = Depends(get_drive_client),
    token_store: TokenStore = Depends(get_token_store),
):
    tokens = token_store.load(request)
    if not tokens:
        logger.info("No Google tokens found, redirecting to auth URL")
        return _auth_required(drive, "Google Drive authentication required")

    now = datetime.now()
    filename = report_filename(now)
    content = render_text_report(calculate_budget(payload.budget), now).encode("utf-8")

    logger.info("Uploading file to Google Drive: %s", filename)
    try:
        result = await drive.upload(filename, REPORT_MIME_TYPE, content, tokens)
    except httpx.TimeoutException:
        logger.warning("Google Drive upload timed out")
        return JSONResponse(
            status_code=504,
            content={"detail": "Google Drive did not respond in time, please try again", "retryable": True},
        )
    except (DriveError, httpx.HTTPError) as e:
        message = str(e) or "Failed to upload file to Google Drive"
        logger.error("Google Drive upload error: %s", message)

        if any(marker in message for marker in EXPIRED_MARKERS):
            response = _auth_required(drive, "Google authentication expired. Please reconnect.")
            token_store.clear(response)
            return response

        return JSONResponse(
            status_code=500,
            content={"detail": "Failed to upload file to Google Drive", "details": message},
        )

    logger.info("File uploaded successfully: %s", result.get("id"))
    return DriveUploadRead(success=True, file=DriveFileRead.model_validate(result))

import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from app.api.deps import get_app_settings, get_mailer
from app.core.config import Settings
from app.schemas.email import EmailReport, EmailReportRead
from app.utils.budget_calculator import calculate_budget
from app.utils.mailer import Mailer
from app.utils.report import render_email_html, render_email_text

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/email", tags=["email"])

SUBJECT = "Your 50/30/20 Budget Summary"


@router.post("/report", response_model=EmailReportRead)
def send_report(
    report: EmailReport,
    mailer: Mailer = Depends(get_mailer),
    settings: Settings = Depends(get_app_settings),
):
    calculated = calculate_budget(report.budget)

    try:
        receipt = mailer.send(
            to=str(report.email),
            subject=SUBJECT,
            html=render_email_html(calculated),
            text=render_email_text(calculated),
        )
    except (TimeoutError, httpx.TimeoutException):
        logger.warning("Mail delivery to %s timed out", report.email)
        return JSONResponse(
            status_code=504,
            content={"detail": "Sending the email timed out, please try again", "retryable": True},
        )
    except Exception:
        logger.exception("Email error")
        raise HTTPException(status_code=500, detail="Failed to send email")

    return EmailReportRead(
        success=True,
        message="Email sent successfully",
        preview_url=None if settings.is_production else receipt.preview_url,
    )

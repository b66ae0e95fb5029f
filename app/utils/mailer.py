# app/utils/mailer.py

import logging
import re
import smtplib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import make_msgid, parseaddr
from typing import Optional

import httpx

from app.core.config import Settings

logger = logging.getLogger(__name__)

ETHEREAL_ACCOUNT_URL = "https://api.nodemailer.com/user"
ETHEREAL_MESSAGE_URL = "https://ethereal.email/message/{msgid}"
_MSGID_RE = re.compile(r"MSGID=([^\s\]]+)")


class MailerError(Exception):
    pass


@dataclass
class MailReceipt:
    message_id: str
    preview_url: Optional[str] = None


@dataclass
class SmtpAccount:
    host: str
    port: int
    user: Optional[str]
    password: Optional[str]
    use_ssl: bool = False


def preview_url_from_reply(reply: str) -> Optional[str]:
    """Ethereal answers DATA with '250 Accepted [STATUS=new MSGID=...]'."""
    match = _MSGID_RE.search(reply or "")
    if not match:
        return None
    return ETHEREAL_MESSAGE_URL.format(msgid=match.group(1))


class Mailer(ABC):
    @abstractmethod
    def send(self, to: str, subject: str, html: str, text: str) -> MailReceipt:
        ...


class SmtpMailer(Mailer):
    """
    Sends through the configured SMTP relay. Outside production, when no
    credentials are configured, a throwaway Ethereal account is created and the
    receipt carries a link to preview the captured message.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def _create_test_account(self) -> SmtpAccount:
        payload = {"requestor": "budget-planner", "version": "1.0.0"}
        with httpx.Client(timeout=self.settings.http_timeout_seconds) as client:
            r = client.post(ETHEREAL_ACCOUNT_URL, json=payload)
            r.raise_for_status()
            data = r.json()
        if data.get("status") != "success":
            raise MailerError(f"Could not create test mail account: {data.get('error', 'unknown error')}")
        smtp = data.get("smtp", {})
        return SmtpAccount(
            host=smtp.get("host", "smtp.ethereal.email"),
            port=int(smtp.get("port", 587)),
            user=data["user"],
            password=data["pass"],
            use_ssl=bool(smtp.get("secure", False)),
        )

    def _account(self) -> SmtpAccount:
        s = self.settings
        if s.smtp_host:
            return SmtpAccount(
                host=s.smtp_host,
                port=s.smtp_port,
                user=s.smtp_user,
                password=s.smtp_password,
                use_ssl=s.smtp_port == 465,
            )
        if s.is_production:
            raise MailerError("SMTP is not configured")
        return self._create_test_account()

    def send(self, to: str, subject: str, html: str, text: str) -> MailReceipt:
        account = self._account()

        message = EmailMessage()
        message["From"] = self.settings.mail_from
        message["To"] = to
        message["Subject"] = subject
        message["Message-ID"] = make_msgid(domain="mycollegefinance.com")
        message.set_content(text)
        message.add_alternative(html, subtype="html")

        smtp_class = smtplib.SMTP_SSL if account.use_ssl else smtplib.SMTP
        timeout = self.settings.http_timeout_seconds
        with smtp_class(account.host, account.port, timeout=timeout) as smtp:
            smtp.ehlo()
            if not account.use_ssl and smtp.has_extn("starttls"):
                smtp.starttls()
                smtp.ehlo()
            if account.user:
                smtp.login(account.user, account.password or "")
            # mail/rcpt/data by hand to keep the server's reply to DATA
            sender = account.user or parseaddr(self.settings.mail_from)[1]
            code, reply = smtp.mail(sender)
            if code != 250:
                raise MailerError(f"Sender rejected: {code} {reply.decode(errors='replace')}")
            code, reply = smtp.rcpt(to)
            if code not in (250, 251):
                raise MailerError(f"Recipient rejected: {code} {reply.decode(errors='replace')}")
            code, reply = smtp.data(message.as_bytes())
            if code != 250:
                raise MailerError(f"Message rejected: {code} {reply.decode(errors='replace')}")

        reply_text = reply.decode(errors="replace")
        preview_url = None if self.settings.is_production else preview_url_from_reply(reply_text)
        logger.info("Message sent: %s", message["Message-ID"])
        if preview_url:
            logger.info("Preview URL: %s", preview_url)
        return MailReceipt(message_id=message["Message-ID"], preview_url=preview_url)

import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from app.storage.memory import MemoryStorage
from app.utils.google_drive import GoogleDriveClient
from app.utils.mailer import Mailer, MailReceipt

PREVIEW_URL = "https://ethereal.email/message/test-msgid"


class FakeMailer(Mailer):
    def __init__(self):
        self.sent = []
        self.error = None

    def send(self, to, subject, html, text):
        if self.error:
            raise self.error
        self.sent.append({"to": to, "subject": subject, "html": html, "text": text})
        return MailReceipt(message_id="<1@mycollegefinance.com>", preview_url=PREVIEW_URL)


class FakeGoogle:
    """Stands in for Google's token and upload endpoints."""

    def __init__(self):
        self.requests = []
        self.token_response = httpx.Response(200, json={"access_token": "access-1", "refresh_token": "refresh-1"})
        self.upload_response = httpx.Response(
            200, json={"id": "file-1", "name": "report.txt", "webViewLink": "https://drive.google.com/file/d/file-1"}
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "oauth2.googleapis.com":
            return self.token_response
        return self.upload_response


@pytest.fixture
def settings():
    return Settings(
        secret_key="test-secret",
        google_client_id="client-id",
        google_client_secret="client-secret",
        public_base_url="http://testserver",
    )


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def fake_google():
    return FakeGoogle()


@pytest.fixture
def drive_client(settings, fake_google):
    return GoogleDriveClient(settings, transport=httpx.MockTransport(fake_google))


@pytest.fixture
def app(settings, storage, mailer, drive_client):
    return create_app(settings, storage=storage, mailer=mailer, drive_client=drive_client)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def scenario_a():
    return {
        "income": 4000,
        "additionalIncome": 0,
        "needs": [{"name": "Rent", "amount": 1800, "category": "needs"}],
        "wants": [{"name": "Dining out", "amount": 1000, "category": "wants"}],
        "savings": [{"name": "Emergency fund", "amount": 600, "category": "savings"}],
    }

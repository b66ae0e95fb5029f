from fastapi import Request

from app.core.config import Settings
from app.core.tokens import TokenStore
from app.storage.base import BudgetStorage
from app.utils.google_drive import GoogleDriveClient
from app.utils.mailer import Mailer


# Collaborators are built once in create_app() and kept on app.state;
# tests swap them through app.dependency_overrides.

def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> BudgetStorage:
    return request.app.state.storage


def get_mailer(request: Request) -> Mailer:
    return request.app.state.mailer


def get_drive_client(request: Request) -> GoogleDriveClient:
    return request.app.state.drive_client


def get_token_store(request: Request) -> TokenStore:
    return request.app.state.token_store

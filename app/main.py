import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import budget, email, google, users
from app.core.config import Settings, get_settings
from app.core.errors import register_exception_handlers
from app.core.tokens import CookieTokenStore
from app.database import create_db_and_tables, get_engine
from app.storage.base import BudgetStorage
from app.storage.memory import MemoryStorage
from app.storage.sql import SqlStorage
from app.utils.google_drive import GoogleDriveClient
from app.utils.mailer import Mailer, SmtpMailer

logger = logging.getLogger(__name__)


def build_storage(settings: Settings) -> BudgetStorage:
    if settings.database_url:
        return SqlStorage(get_engine(settings.database_url, echo=settings.sql_echo))
    logger.warning("DATABASE_URL not set, budgets are kept in memory only")
    return MemoryStorage()


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[BudgetStorage] = None,
    mailer: Optional[Mailer] = None,
    drive_client: Optional[GoogleDriveClient] = None,
) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if isinstance(app.state.storage, SqlStorage):
            create_db_and_tables(app.state.storage.engine)
        logger.info("Google OAuth configured with redirect URI: %s", settings.google_redirect_uri)
        yield

    app = FastAPI(title="50/30/20 Budget Planner", lifespan=lifespan)

    app.state.settings = settings
    app.state.storage = storage or build_storage(settings)
    app.state.mailer = mailer or SmtpMailer(settings)
    app.state.drive_client = drive_client or GoogleDriveClient(settings)
    app.state.token_store = CookieTokenStore(
        secret_key=settings.secret_key,
        algorithm=settings.algorithm,
        secure=settings.is_production,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(budget.router)
    app.include_router(email.router)
    app.include_router(google.router)
    app.include_router(users.router)

    @app.get("/")
    def root():
        return {"message": "50/30/20 budget planner"}

    return app


app = create_app()

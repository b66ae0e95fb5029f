# app/core/tokens.py

import logging
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any, Dict, Optional

from fastapi import Request, Response

from app.core.security import create_signed_token, decode_signed_token

logger = logging.getLogger(__name__)

GOOGLE_TOKENS_COOKIE = "google_tokens"
TOKEN_TTL = timedelta(hours=1)


class TokenStore(ABC):
    """Where the Google OAuth tokens of a browser session are kept."""

    @abstractmethod
    def load(self, request: Request) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def save(self, response: Response, tokens: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    def clear(self, response: Response) -> None:
        ...


class CookieTokenStore(TokenStore):
    """
    Keeps the tokens client-side in a signed cookie that expires after one hour.
    The expiry is enforced twice: by the cookie max-age and by the JWT `exp` claim.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", secure: bool = False,
                 cookie_name: str = GOOGLE_TOKENS_COOKIE, ttl: timedelta = TOKEN_TTL):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.secure = secure
        self.cookie_name = cookie_name
        self.ttl = ttl

    def load(self, request: Request) -> Optional[Dict[str, Any]]:
        raw = request.cookies.get(self.cookie_name)
        if not raw:
            return None
        payload = decode_signed_token(raw, self.secret_key, self.algorithm)
        if payload is None:
            logger.info("Ignoring invalid or expired %s cookie", self.cookie_name)
            return None
        return payload.get("tokens")

    def save(self, response: Response, tokens: Dict[str, Any]) -> None:
        value = create_signed_token({"tokens": tokens}, self.secret_key, self.algorithm, self.ttl)
        response.set_cookie(
            self.cookie_name,
            value,
            max_age=int(self.ttl.total_seconds()),
            httponly=True,
            secure=self.secure,
            samesite="lax",
        )

    def clear(self, response: Response) -> None:
        response.delete_cookie(self.cookie_name, httponly=True, secure=self.secure, samesite="lax")

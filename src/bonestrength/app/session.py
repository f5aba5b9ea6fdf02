"""
Browser Session Token Slot

The browser session is an encrypted cookie managed by aiohttp-session. It holds at most
one value the application cares about: the provider access token, stored under the
configured key. These helpers are the only code that reads or writes that key, so the
rest of the application sees the token as present (a non-empty string) or absent.

The session is read when a request first asks for it and written back by the session
middleware when the response is sent. Two concurrent requests from the same browser can
therefore overwrite each other's changes.
"""

import logging
from typing import Optional

from aiohttp import web
from aiohttp_session import get_session, new_session, setup
from aiohttp_session.cookie_storage import EncryptedCookieStorage

from bonestrength.app.config import Settings, SettingsAppKey

logger = logging.getLogger(__name__)


def setup_sessions(app: web.Application, settings: Settings) -> None:
    storage = EncryptedCookieStorage(
        settings.cookie_secret,
        cookie_name=settings.session_name,
        httponly=True,
        samesite="Lax",
    )
    setup(app, storage)


async def load_access_token(request: web.Request) -> Optional[str]:
    settings = request.app[SettingsAppKey]
    session = await get_session(request)
    access_token = session.get(settings.session_access_token_key)
    if isinstance(access_token, str) and access_token:
        return access_token
    if access_token is not None:
        logger.warning("Ignoring malformed access token value in session")
    return None


async def store_access_token(request: web.Request, access_token: str) -> None:
    """Start a fresh session holding only the new access token."""
    settings = request.app[SettingsAppKey]
    session = await new_session(request)
    session[settings.session_access_token_key] = access_token


async def clear_access_token(request: web.Request) -> None:
    settings = request.app[SettingsAppKey]
    session = await get_session(request)
    session.pop(settings.session_access_token_key, None)

"""
OAuth 2.0 Authorization Code Flow

This module implements the client side of the provider's authorization code grant
(RFC 6749 section 4.1). A browser session moves through these states:

1. Unauthenticated: no access token in the session. The home page shows a link to the
   provider's consent screen built from `consent_context`.
2. AwaitingCallback: the user is on the provider's consent screen. The provider
   redirects back to /receive_code/ with either ``code`` or ``error``. This state is
   never observed by the server, so it has no `FlowState` member.
3. Authenticated: `exchange_code` traded the code for an access token, which the
   handler stores in the session.
4. Error: consent was denied, the callback was malformed, or the exchange failed.

The scope sent to the consent screen and to the token endpoint is the same string,
taken from the settings; the provider may reject an exchange whose scope differs.
"""

import asyncio
from enum import Enum
import logging
from time import time
from typing import Mapping, Optional

import aiohttp
from aiohttp import ClientSession, FormData
from pydantic import BaseModel, ValidationError

from bonestrength.app.config import Settings
from bonestrength.app.metrics import MetricsClient
from bonestrength.errors import (
    MalformedCallback,
    ProviderDeniedConsent,
    ProviderRejected,
    TokenDecodeFailed,
    UpstreamUnavailable,
)
from bonestrength.model.token import TokenResponse

logger = logging.getLogger(__name__)


class FlowState(Enum):
    unauthenticated = "unauthenticated"
    authenticated = "authenticated"
    error = "error"


class ConsentContext(BaseModel):
    """
    Everything the home page needs to send an unauthenticated user to the consent screen.

    ``path`` is the originally requested path. It is informational only: after login the
    user is always redirected to ``/``.
    """

    client_id: str
    scope: str
    redirect_uri: str
    path: str
    authorize_url: str


def consent_context(settings: Settings, path: str) -> ConsentContext:
    return ConsentContext(
        client_id=settings.client_id,
        scope=settings.scope,
        redirect_uri=settings.redirect_uri,
        path=path,
        authorize_url=settings.authorize_url,
    )


def read_callback(query: Mapping[str, str]) -> str:
    """
    Extract the authorization code from the callback query parameters.

    Returns:
        str: The authorization code

    Raises:
        ProviderDeniedConsent: If the provider sent ``error`` instead of ``code``
        MalformedCallback: If neither ``code`` nor ``error`` is present
    """
    code: Optional[str] = query.get("code", None)
    if code:
        return code

    error: Optional[str] = query.get("error", None)
    if error is not None:
        raise ProviderDeniedConsent(error, query.get("error_description", ""))

    raise MalformedCallback()


async def exchange_code(
    settings: Settings,
    http_session: ClientSession,
    metrics_client: MetricsClient,
    code: str,
) -> TokenResponse:
    """
    Exchange an authorization code for an access token.

    The code is single-use; this function makes exactly one request to the token
    endpoint and does not retry.

    Args:
        settings: Application settings
        http_session: HTTP session for making requests
        metrics_client: Metrics client for timing the exchange
        code: Authorization code from the callback

    Returns:
        TokenResponse: The decoded token endpoint response

    Raises:
        UpstreamUnavailable: If the token endpoint could not be reached
        ProviderRejected: If the token endpoint answered with a non-200 status
        TokenDecodeFailed: If the response body is not a valid token response
    """
    data = FormData(
        {
            "client_id": settings.client_id,
            "client_secret": settings.client_secret,
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": settings.redirect_uri,
            "scope": settings.scope,
        }
    )

    start_time = time()
    status = 0
    try:
        async with http_session.post(settings.token_url, data=data) as response:
            status = response.status
            if status != 200:
                raise ProviderRejected(status)
            body = await response.read()
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise UpstreamUnavailable(settings.token_url, type(e).__name__) from e
    finally:
        metrics_client.timer(
            "oauth.token.time",
            time() - start_time,
            tag_dict={"status": status},
        )

    try:
        return TokenResponse.model_validate_json(body)
    except ValidationError as e:
        reasons = ", ".join(sorted({error["type"] for error in e.errors()}))
        raise TokenDecodeFailed(reasons) from e

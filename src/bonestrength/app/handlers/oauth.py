"""
OAuth Callback Handler

Handles the provider's redirect back to the application after the consent screen:

- GET /receive_code/?code=... exchanges the code for an access token, stores it in the
  browser session and redirects to the home page with 303 See Other.
- GET /receive_code/?error=...&error_description=... echoes the provider's error as
  plain text and leaves the session untouched.
- Any other callback is answered with 400 Bad Request.

Failures of the token exchange itself are rendered as an alert page offering to start
the login again. The session is only modified after a successful exchange.
"""

import logging

from aiohttp import web
import aiohttp_jinja2

from bonestrength.app.config import (
    MetricsClientAppKey,
    SessionAppKey,
    SettingsAppKey,
)
from bonestrength.app.session import store_access_token
from bonestrength.errors import (
    MalformedCallback,
    ProviderDeniedConsent,
    ProviderRejected,
    TokenDecodeFailed,
    UpstreamUnavailable,
)
from bonestrength.provider.oauth import FlowState, exchange_code, read_callback

logger = logging.getLogger(__name__)


def _record_outcome(request: web.Request, state: FlowState, reason: str) -> None:
    request.app[MetricsClientAppKey].increment(
        "oauth.callback",
        1,
        tag_dict={"state": state.value, "reason": reason},
    )


async def handle_receive_code(request: web.Request):
    settings = request.app[SettingsAppKey]
    http_session = request.app[SessionAppKey]
    metrics_client = request.app[MetricsClientAppKey]

    try:
        code = read_callback(request.query)
        token = await exchange_code(settings, http_session, metrics_client, code)
    except ProviderDeniedConsent as e:
        logger.info("Provider returned an error to the callback: %s", e.error)
        _record_outcome(request, FlowState.error, "denied")
        return web.Response(text=f"{e.error}: {e.description}")
    except MalformedCallback as e:
        logger.info("Callback without code or error")
        _record_outcome(request, FlowState.error, "malformed")
        return web.Response(status=400, text=str(e))
    except (ProviderRejected, TokenDecodeFailed, UpstreamUnavailable) as e:
        logger.warning("Authorization code exchange failed: %s", e)
        _record_outcome(request, FlowState.error, type(e).__name__)
        return await aiohttp_jinja2.render_template_async(
            "alert.html",
            request,
            context={
                "error_message": "We could not complete your login. Please try again.",
                "retry_url": settings.authorize_url,
            },
            status=502,
        )

    await store_access_token(request, token.access_token)
    _record_outcome(request, FlowState.authenticated, "ok")
    logger.info("Stored access token of type %s in session", token.token_type or "unknown")
    raise web.HTTPSeeOther("/")

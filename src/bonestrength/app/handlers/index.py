"""
Home Page Handler

GET / renders one of two pages depending on the browser session:

- Without an access token, the consent page linking to the provider's consent screen.
- With an access token, the account's profiles and their bone strength scores.

If the provider refuses the stored token on any data request, the token is cleared from
the session and the browser is redirected to / so that the consent flow starts over.
"""

import logging

from aiohttp import web
import aiohttp_jinja2

from bonestrength.app.config import (
    MetricsClientAppKey,
    SessionAppKey,
    SettingsAppKey,
)
from bonestrength.app.session import clear_access_token, load_access_token
from bonestrength.errors import TokenExpiredOrInvalid, UpstreamUnavailable
from bonestrength.provider.api import fetch_genotypes, fetch_names, fetch_user
from bonestrength.provider.oauth import FlowState, consent_context
from bonestrength.scoring import score_profiles

logger = logging.getLogger(__name__)


async def handle_index(request: web.Request):
    settings = request.app[SettingsAppKey]
    metrics_client = request.app[MetricsClientAppKey]

    access_token = await load_access_token(request)
    if access_token is None:
        metrics_client.increment(
            "oauth.consent", 1, tag_dict={"state": FlowState.unauthenticated.value}
        )
        return await aiohttp_jinja2.render_template_async(
            "index.html",
            request,
            context={"consent": consent_context(settings, request.path)},
        )

    http_session = request.app[SessionAppKey]

    try:
        user = await fetch_user(settings, http_session, metrics_client, access_token)
        names = await fetch_names(settings, http_session, metrics_client, access_token)
        genotypes = await fetch_genotypes(
            settings, http_session, metrics_client, access_token
        )
    except TokenExpiredOrInvalid as e:
        logger.info("Clearing session token after status %s from provider", e.status)
        metrics_client.increment("session.token.cleared", 1, tag_dict={"status": e.status})
        await clear_access_token(request)
        raise web.HTTPFound("/")
    except UpstreamUnavailable as e:
        logger.warning("Provider unavailable: %s", e)
        return await aiohttp_jinja2.render_template_async(
            "alert.html",
            request,
            context={
                "error_message": "The genetic data provider is unavailable. Please try again later.",
                "retry_url": "/",
            },
            status=502,
        )

    results = score_profiles(genotypes, names.profiles)
    return await aiohttp_jinja2.render_template_async(
        "result.html",
        request,
        context={"user": user, "results": results},
    )

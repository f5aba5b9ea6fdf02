"""
Provider Data API Client

Performs bearer-authenticated requests against the provider's data API. ``fetch_json``
is the raw primitive: it returns the response body and status without interpreting them,
so that callers can branch on refused tokens. The typed fetchers built on it raise
TokenExpiredOrInvalid for any non-200 status and UpstreamUnavailable when the provider
cannot be reached or returns a body that does not decode.

Requests are single-attempt with aiohttp's default timeouts. The access token is sent
in the Authorization header only and never logged.
"""

import asyncio
import logging
from time import time
from typing import List, Tuple, Type, TypeVar, Union

import aiohttp
from aiohttp import ClientSession
from pydantic import BaseModel, TypeAdapter, ValidationError

from bonestrength.app.config import Settings
from bonestrength.app.metrics import MetricsClient
from bonestrength.errors import TokenExpiredOrInvalid, UpstreamUnavailable
from bonestrength.model.genotype import GenotypeRecord
from bonestrength.model.profile import NamesResponse, UserRecord

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_GENOTYPES = TypeAdapter(Union[List[GenotypeRecord], GenotypeRecord])


async def fetch_json(
    http_session: ClientSession,
    metrics_client: MetricsClient,
    method: str,
    url: str,
    access_token: str,
) -> Tuple[str, int]:
    """
    Make an authenticated request and return the raw body and HTTP status.

    A failure while reading the body is logged and reported as an empty body; callers
    must treat an empty body as a failed request.

    Raises:
        UpstreamUnavailable: If the request could not be sent or no response arrived
    """
    headers = {"Authorization": f"Bearer {access_token}"}
    start_time = time()
    status = 0
    try:
        async with http_session.request(method, url, headers=headers) as response:
            status = response.status
            try:
                body = await response.text()
            except (aiohttp.ClientError, UnicodeDecodeError) as e:
                logger.warning(
                    "Unable to read response body from %s (status %s): %s",
                    url,
                    status,
                    type(e).__name__,
                )
                body = ""
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        metrics_client.increment(
            "provider.request.exception",
            1,
            tag_dict={"exception": type(e).__name__, "method": method},
        )
        raise UpstreamUnavailable(url, type(e).__name__) from e
    finally:
        metrics_client.timer(
            "provider.request.time",
            time() - start_time,
            tag_dict={"method": method, "status": status},
        )
    return body, status


async def _get(
    http_session: ClientSession,
    metrics_client: MetricsClient,
    url: str,
    access_token: str,
) -> str:
    body, status = await fetch_json(http_session, metrics_client, "GET", url, access_token)
    if status != 200:
        raise TokenExpiredOrInvalid(status, url)
    if not body:
        raise UpstreamUnavailable(url, "empty response body")
    return body


def _decode(model: Type[ModelT], url: str, body: str) -> ModelT:
    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        raise UpstreamUnavailable(url, f"{e.error_count()} validation errors") from e


async def fetch_user(
    settings: Settings,
    http_session: ClientSession,
    metrics_client: MetricsClient,
    access_token: str,
) -> UserRecord:
    url = f"{settings.api_uri}/1/user/"
    body = await _get(http_session, metrics_client, url, access_token)
    return _decode(UserRecord, url, body)


async def fetch_names(
    settings: Settings,
    http_session: ClientSession,
    metrics_client: MetricsClient,
    access_token: str,
) -> NamesResponse:
    url = f"{settings.api_uri}/1/names/"
    body = await _get(http_session, metrics_client, url, access_token)
    return _decode(NamesResponse, url, body)


async def fetch_genotypes(
    settings: Settings,
    http_session: ClientSession,
    metrics_client: MetricsClient,
    access_token: str,
) -> List[GenotypeRecord]:
    """
    Fetch the scored genotype locations for every profile in the account.

    The provider answers with a list of per-profile objects, or with a single object when
    the account has one profile; both are returned as a list.
    """
    url = f"{settings.api_uri}/1/genotype/?locations={settings.genotype_locations}"
    body = await _get(http_session, metrics_client, url, access_token)
    try:
        genotypes = _GENOTYPES.validate_json(body)
    except ValidationError as e:
        raise UpstreamUnavailable(url, f"{e.error_count()} validation errors") from e

    if isinstance(genotypes, GenotypeRecord):
        genotypes = [genotypes]
    logger.debug("Fetched genotypes for %d profiles", len(genotypes))
    return genotypes

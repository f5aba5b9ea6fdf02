import asyncio
import logging
from typing import NoReturn

from aiohttp import web

from bonestrength.app.config import HealthGaugeAppKey, MetricsClientAppKey

logger = logging.getLogger(__name__)

HEALTH_TICK_SECONDS = 30


async def tick_health_task(app: web.Application) -> NoReturn:
    """
    Tick the health gauge every 30 seconds, reducing the failure count by 1 each time
    and reporting the remaining count as the ``health.failures`` gauge.
    """

    logger.info("Starting health gauge task")

    health_gauge = app[HealthGaugeAppKey]
    metrics_client = app[MetricsClientAppKey]
    while True:
        failures = await health_gauge.tick()
        metrics_client.gauge("health.failures", failures)
        await asyncio.sleep(HEALTH_TICK_SECONDS)

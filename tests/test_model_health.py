"""
Unit tests for bonestrength.model.health
"""

import pytest

from bonestrength.model.health import HealthGauge


class TestHealthGauge:
    @pytest.mark.asyncio
    async def test_healthy_by_default(self):
        assert await HealthGauge().is_healthy()

    @pytest.mark.asyncio
    async def test_burst_of_failures_is_unhealthy(self):
        gauge = HealthGauge(health_threshold=2)

        assert await gauge.record_failure() == 1
        assert await gauge.record_failure(2) == 3

        assert not await gauge.is_healthy()

    @pytest.mark.asyncio
    async def test_tick_recovers(self):
        gauge = HealthGauge(value=3, health_threshold=2)

        assert await gauge.tick() == 2

        assert await gauge.is_healthy()

    @pytest.mark.asyncio
    async def test_tick_stops_at_zero(self):
        gauge = HealthGauge(health_threshold=0)

        await gauge.tick()
        await gauge.record_failure()

        assert not await gauge.is_healthy()

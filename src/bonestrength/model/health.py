import asyncio


class HealthGauge:
    """
    Error-burst health gauge for readiness probes.

    The gauge is incremented whenever a request fails with an unexpected exception, as
    opposed to the provider errors that are handled and rendered to the user. A background
    task decrements it over time. While a burst of failures keeps the value above the
    threshold, is_healthy returns false and the readiness endpoint reports 503.
    """

    def __init__(self, value: int = 0, health_threshold: int = 100) -> None:
        self._value = value
        self._health_threshold = health_threshold
        self._lock = asyncio.Lock()

    async def record_failure(self, d=1) -> int:
        async with self._lock:
            self._value += int(d)
            return self._value

    async def tick(self) -> int:
        async with self._lock:
            if self._value > 0:
                self._value -= 1
            return self._value

    async def is_healthy(self) -> bool:
        async with self._lock:
            return self._value <= self._health_threshold

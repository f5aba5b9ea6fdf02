"""
Unit tests for bonestrength.app.metrics
"""

import pytest
from unittest.mock import AsyncMock, Mock, patch

from bonestrength.app.metrics import (
    MetricsClient,
    NoOpMetricsClient,
    TelegrafMetricsClient,
    create_metrics_client,
)


class TestMetricsClientInterface:
    def test_interface_is_abstract(self):
        with pytest.raises(TypeError):
            MetricsClient()  # type: ignore


class TestNoOpMetricsClient:
    @pytest.mark.asyncio
    async def test_operations_do_nothing(self):
        client = NoOpMetricsClient()
        await client.connect()
        client.increment("test.counter", 1, {"tag": "value"})
        client.gauge("test.gauge", 42.5)
        client.timer("test.timer", 0.25)
        await client.close()


class TestTelegrafMetricsClient:
    @pytest.fixture
    def telegraf(self):
        mock = Mock()
        mock.connect = AsyncMock()
        mock.close = AsyncMock()
        return mock

    def test_prefixes_metric_names(self, telegraf):
        client = TelegrafMetricsClient(telegraf, prefix="bonestrength")

        client.increment("oauth.callback", 1, {"state": "authenticated"})
        client.gauge("queue", 3)
        client.timer("provider.request.time", 0.5)

        telegraf.increment.assert_called_once_with(
            "bonestrength.oauth.callback", 1, tag_dict={"state": "authenticated"}
        )
        telegraf.gauge.assert_called_once_with("bonestrength.queue", 3, tag_dict={})
        telegraf.timer.assert_called_once_with(
            "bonestrength.provider.request.time", 0.5, tag_dict={}
        )

    def test_without_prefix(self, telegraf):
        client = TelegrafMetricsClient(telegraf)

        client.increment("server.request.count")

        telegraf.increment.assert_called_once_with("server.request.count", 1, tag_dict={})

    @pytest.mark.asyncio
    async def test_connect_and_close(self, telegraf):
        client = TelegrafMetricsClient(telegraf)

        await client.connect()
        await client.close()

        telegraf.connect.assert_awaited_once()
        telegraf.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_errors_are_logged(self, telegraf):
        telegraf.close.side_effect = OSError("socket closed")
        client = TelegrafMetricsClient(telegraf)

        await client.close()


class TestCreateMetricsClient:
    def test_none_backend(self):
        assert isinstance(create_metrics_client("none"), NoOpMetricsClient)

    def test_backend_is_case_insensitive(self):
        assert isinstance(create_metrics_client("NONE"), NoOpMetricsClient)

    @patch("bonestrength.app.metrics.TelegrafStatsdClient")
    def test_telegraf_backend(self, mock_telegraf_class):
        mock_instance = Mock()
        mock_telegraf_class.return_value = mock_instance

        client = create_metrics_client(
            "telegraf", host="localhost", port=8125, prefix="bs", debug=True
        )

        assert isinstance(client, TelegrafMetricsClient)
        assert client.client is mock_instance
        assert client.prefix == "bs"
        mock_telegraf_class.assert_called_once_with(host="localhost", port=8125, debug=True)

    def test_invalid_backend(self):
        with pytest.raises(ValueError):
            create_metrics_client("carrier-pigeon")

"""
MCP Observability - Built-in Health Check Tests
メモリ・外部依存先チェックのテスト
"""

import asyncio
import socket
from types import SimpleNamespace
from unittest.mock import patch

import psutil
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from mcp_observability.health import HealthStatus, MemoryHealthCheck, DependencyHealthCheck
from mcp_observability.health.checks import DEFAULT_USER_AGENT

MEMORY_PSUTIL = "mcp_observability.health.checks.memory_check.psutil"


class TestMemoryHealthCheck:
    """MemoryHealthCheckのテストクラス"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("system_ratio,heap_ratio,expected", [
        (0.5, 0.5, HealthStatus.HEALTHY),
        (0.79, 0.1, HealthStatus.HEALTHY),
        (0.8, 0.1, HealthStatus.DEGRADED),
        (0.1, 0.85, HealthStatus.DEGRADED),
        (0.9, 0.1, HealthStatus.UNHEALTHY),
        (0.1, 0.95, HealthStatus.UNHEALTHY),
        (0.85, 0.95, HealthStatus.UNHEALTHY),
    ])
    async def test_thresholds(self, fake_psutil, system_ratio, heap_ratio, expected):
        """使用率の閾値判定"""
        with patch(MEMORY_PSUTIL, fake_psutil(system_ratio, heap_ratio)):
            result = await MemoryHealthCheck().check()

        assert result.status == expected
        assert result.duration >= 0

    @pytest.mark.asyncio
    async def test_details(self, fake_psutil):
        with patch(MEMORY_PSUTIL, fake_psutil(0.85, 0.5)):
            result = await MemoryHealthCheck().check()

        assert result.message == "High memory usage detected"
        assert result.details["system"]["percentage"] == 85
        assert result.details["system"]["total"] == 1000
        assert result.details["process"]["heap_percentage"] == 50
        assert result.details["process"]["external"] == 10

    @pytest.mark.asyncio
    async def test_custom_thresholds(self, fake_psutil):
        check = MemoryHealthCheck(warning_threshold=0.5, critical_threshold=0.6)
        with patch(MEMORY_PSUTIL, fake_psutil(0.55, 0.1)):
            result = await check.check()

        assert result.status == HealthStatus.DEGRADED

    @pytest.mark.asyncio
    async def test_failure_becomes_unhealthy(self, fake_psutil):
        """内部エラーは例外にせず UNHEALTHY"""
        broken = fake_psutil(0.1, 0.1)
        broken.virtual_memory.side_effect = OSError("no /proc")

        with patch(MEMORY_PSUTIL, broken):
            result = await MemoryHealthCheck().check()

        assert result.status == HealthStatus.UNHEALTHY
        assert result.message == "Failed to check memory: no /proc"

    @pytest.mark.asyncio
    async def test_real_system(self):
        """システム使用率が低ければ待機中のインタープリタは HEALTHY"""
        if psutil.virtual_memory().percent >= 50:
            pytest.skip("host memory usage too high for this check")

        result = await MemoryHealthCheck().check()

        assert result.details["system"]["total"] > 0
        assert result.details["process"]["heap_percentage"] < 50
        assert result.status == HealthStatus.HEALTHY
        assert result.message == "Memory usage is within normal limits"

    @pytest.mark.asyncio
    async def test_process_ratio_uses_memory_limit(self, fake_psutil):
        """プロセス使用率は RSS / メモリ上限（仮想メモリサイズは使わない）"""
        mock = fake_psutil(0.1, 0.05)
        mock.Process.return_value.memory_info.return_value = SimpleNamespace(
            rss=50, vms=58, shared=0
        )

        with patch(MEMORY_PSUTIL, mock):
            result = await MemoryHealthCheck().check()

        assert result.status == HealthStatus.HEALTHY
        assert result.details["process"]["heap_total"] == 1000
        assert result.details["process"]["heap_percentage"] == 5


def unused_port() -> int:
    """接続を受け付けないポート番号"""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


class TestDependencyHealthCheck:
    """DependencyHealthCheckのテストクラス"""

    async def _check_against(self, handler, timeout_seconds: float = 5.0):
        app = web.Application()
        app.router.add_get("/points", handler)
        server = TestServer(app)
        await server.start_server()
        try:
            check = DependencyHealthCheck(
                name="weather-api",
                url=str(server.make_url("/points")),
                timeout_seconds=timeout_seconds
            )
            return await check.check()
        finally:
            await server.close()

    @pytest.mark.asyncio
    async def test_success_is_healthy(self):
        """2xx は HEALTHY"""
        seen_headers = {}

        async def handler(request):
            seen_headers.update(request.headers)
            return web.json_response({"ok": True})

        result = await self._check_against(handler)

        assert result.status == HealthStatus.HEALTHY
        assert result.details["status_code"] == 200
        assert result.message == "weather-api is accessible"
        assert seen_headers["User-Agent"] == DEFAULT_USER_AGENT

    @pytest.mark.asyncio
    async def test_no_content_is_healthy(self):
        async def handler(request):
            return web.Response(status=204)

        result = await self._check_against(handler)

        assert result.status == HealthStatus.HEALTHY

    @pytest.mark.asyncio
    async def test_server_error_is_unhealthy(self):
        """5xx は UNHEALTHY"""
        async def handler(request):
            return web.Response(status=503, text="maintenance")

        result = await self._check_against(handler)

        assert result.status == HealthStatus.UNHEALTHY
        assert result.details["status_code"] == 503
        assert "server error: 503" in result.message

    @pytest.mark.asyncio
    async def test_client_error_is_degraded(self):
        """その他の非2xxは DEGRADED"""
        async def handler(request):
            return web.Response(status=404)

        result = await self._check_against(handler)

        assert result.status == HealthStatus.DEGRADED
        assert result.details["status_code"] == 404
        assert result.details["status_text"] == "Not Found"

    @pytest.mark.asyncio
    async def test_timeout_is_unhealthy(self):
        """タイムアウトは UNHEALTHY でエラー内容を details に記録"""
        async def handler(request):
            await asyncio.sleep(0.5)
            return web.Response(status=200)

        result = await self._check_against(handler, timeout_seconds=0.1)

        assert result.status == HealthStatus.UNHEALTHY
        assert "timed out" in result.details["error"]
        assert result.duration >= 100 * 0.9

    @pytest.mark.asyncio
    async def test_connection_refused_is_unhealthy(self):
        check = DependencyHealthCheck(url=f"http://127.0.0.1:{unused_port()}/points")

        result = await check.check()

        assert result.status == HealthStatus.UNHEALTHY
        assert result.details["error"]
        assert result.details["error_type"]

    @pytest.mark.asyncio
    async def test_dns_failure_is_unhealthy(self):
        check = DependencyHealthCheck(url="http://nonexistent.invalid/points", timeout_seconds=2.0)

        result = await check.check()

        assert result.status == HealthStatus.UNHEALTHY
        assert "error" in result.details

"""
MCP Observability - Dependency Health Check
外部HTTP依存先への疎通チェック
"""

import asyncio
import logging
import time
from typing import Dict, Any

import aiohttp

from ..types import HealthCheckResult, HealthStatus

logger = logging.getLogger(__name__)

# 米国の地理的中心点（応答が安定しているエンドポイント）
DEFAULT_ENDPOINT = "https://api.weather.gov/points/39.7456,-97.0892"
DEFAULT_USER_AGENT = "(weather-mcp-server, contact@example.com)"


class DependencyHealthCheck:
    """外部依存先のヘルスチェック

    レスポンスボディは読まず、ステータスコードとエラーのみで判定する。
    """

    def __init__(self,
                 name: str = "nws-api",
                 url: str = DEFAULT_ENDPOINT,
                 timeout_seconds: float = 5.0,
                 user_agent: str = DEFAULT_USER_AGENT):
        """
        初期化

        Args:
            name: チェック名
            url: 疎通確認するURL
            timeout_seconds: リクエスト全体のタイムアウト（秒）
            user_agent: 送信するUser-Agent
        """
        self.name = name
        self.url = url
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent

    async def check(self) -> HealthCheckResult:
        """依存先へのGETで疎通確認"""
        start_time = time.perf_counter()

        try:
            timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(self.url, headers={"User-Agent": self.user_agent}) as response:
                    status_code = response.status
                    reason = response.reason

            return self._result_from_status(status_code, reason, self._elapsed_ms(start_time))

        except asyncio.TimeoutError:
            message = f"Request timed out after {self.timeout_seconds}s"
            error_type = "TimeoutError"
        except aiohttp.ClientError as e:
            message = str(e) or type(e).__name__
            error_type = type(e).__name__
        except OSError as e:
            message = str(e) or type(e).__name__
            error_type = type(e).__name__

        logger.warning(f"Dependency check failed: {self.name}, error: {message}")
        return HealthCheckResult(
            status=HealthStatus.UNHEALTHY,
            message=f"Failed to connect to {self.name}: {message}",
            duration=self._elapsed_ms(start_time),
            details={"error": message, "error_type": error_type, "url": self.url}
        )

    def _result_from_status(self, status_code: int, reason: str, duration: float) -> HealthCheckResult:
        """ステータスコードから結果を作成"""
        details: Dict[str, Any] = {"status_code": status_code}

        if 200 <= status_code < 300:
            status = HealthStatus.HEALTHY
            message = f"{self.name} is accessible"
        elif status_code >= 500:
            status = HealthStatus.UNHEALTHY
            message = f"{self.name} returned server error: {status_code}"
            details["status_text"] = reason
        else:
            status = HealthStatus.DEGRADED
            message = f"{self.name} returned unexpected status: {status_code}"
            details["status_text"] = reason

        return HealthCheckResult(
            status=status,
            message=message,
            duration=duration,
            details=details
        )

    @staticmethod
    def _elapsed_ms(start_time: float) -> float:
        return (time.perf_counter() - start_time) * 1000

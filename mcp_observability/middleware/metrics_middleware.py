"""
MCP Observability - Metrics Middleware
ツールリクエスト単位のメトリクス記録
"""

import logging
import time
from typing import Awaitable, Callable, TypeVar

from ..monitoring.metrics_registry import (
    MetricsRegistry,
    REQUESTS_TOTAL,
    REQUESTS_ERRORS,
    REQUEST_DURATION,
    CONNECTIONS_ACTIVE
)
from ..monitoring.timing import elapsed_ms, measure_duration, track_slow_operation

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEPENDENCY_CALLS = "dependency.calls"
DEPENDENCY_ERRORS = "dependency.errors"
DEPENDENCY_RESPONSE_TIME = "dependency.response_time"
CACHE_HITS = "cache.hits"
CACHE_MISSES = "cache.misses"
CACHE_SIZE = "cache.size"


class MetricsMiddleware:
    """リクエスト計測ミドルウェア

    ハンドラーの例外は記録するだけで変換も握りつぶしもしない。
    """

    def __init__(self, metrics_registry: MetricsRegistry,
                 slow_operation_threshold: float = 1000.0):
        """
        初期化

        Args:
            metrics_registry: 記録先のレジストリ
            slow_operation_threshold: 低速処理とみなす所要時間（ミリ秒）
        """
        self.metrics_registry = metrics_registry
        self.slow_operation_threshold = slow_operation_threshold
        self._track_slow_ops = track_slow_operation(
            metrics_registry, slow_operation_threshold
        )

    async def track_request(self, tool: str, handler: Callable[[], Awaitable[T]]) -> T:
        """ツールハンドラーを実行してリクエストメトリクスを記録"""
        labels = {"tool": tool}
        registry = self.metrics_registry

        registry.counter(REQUESTS_TOTAL).increment(labels)
        registry.gauge(CONNECTIONS_ACTIVE).increment()
        start_time = time.perf_counter()

        try:
            return await handler()
        except Exception as e:
            registry.counter(REQUESTS_ERRORS).increment(labels)
            logger.error(f"Request failed for tool: {tool}, error: {e}")
            raise
        finally:
            duration_ms = elapsed_ms(start_time)
            registry.histogram(REQUEST_DURATION).observe(duration_ms, labels)
            registry.gauge(CONNECTIONS_ACTIVE).decrement()
            self._track_slow_ops(duration_ms, tool)
            logger.debug(f"Request completed: {tool} ({duration_ms:.2f}ms)")

    async def track_dependency_call(self, operation: str,
                                    handler: Callable[[], Awaitable[T]]) -> T:
        """外部API呼び出しを実行して呼び出し回数・エラー・応答時間を記録"""
        labels = {"operation": operation}
        self.metrics_registry.counter(DEPENDENCY_CALLS).increment(labels)

        try:
            return await measure_duration(
                self.metrics_registry, DEPENDENCY_RESPONSE_TIME, labels, handler
            )
        except Exception:
            self.metrics_registry.counter(DEPENDENCY_ERRORS).increment(labels)
            raise

    def track_cache_operation(self, hit: bool) -> None:
        if hit:
            self.metrics_registry.counter(CACHE_HITS).increment()
        else:
            self.metrics_registry.counter(CACHE_MISSES).increment()

    def update_cache_size(self, size: int) -> None:
        self.metrics_registry.gauge(CACHE_SIZE).set(size)

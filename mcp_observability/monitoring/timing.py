"""
MCP Observability - Timing Helpers
非同期処理の所要時間計測と低速処理の検出
"""

import logging
import time
from typing import Awaitable, Callable, Optional, TypeVar

from .labels import Labels
from .metrics_registry import MetricsRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")

SLOW_OPERATIONS = "slow_operations"


def elapsed_ms(start: float) -> float:
    """perf_counter の開始値からの経過ミリ秒"""
    return (time.perf_counter() - start) * 1000


async def measure_duration(registry: MetricsRegistry,
                           histogram_name: str,
                           labels: Labels,
                           fn: Callable[[], Awaitable[T]]) -> T:
    """fn() の所要時間をヒストグラムに記録

    失敗時は labels に status=error を加えて記録し、例外はそのまま送出する。
    """
    start = time.perf_counter()
    try:
        result = await fn()
    except Exception:
        error_labels = dict(labels or {})
        error_labels["status"] = "error"
        registry.histogram(histogram_name).observe(elapsed_ms(start), error_labels)
        raise

    registry.histogram(histogram_name).observe(elapsed_ms(start), labels)
    return result


def track_slow_operation(registry: MetricsRegistry,
                         threshold_ms: float = 1000.0,
                         operation_name: Optional[str] = None) -> Callable[..., bool]:
    """閾値を超えた処理を数える関数を返す

    返り値の関数は (duration_ms, operation=None) を受け取り、
    閾値超過なら slow_operations を加算して True を返す。
    """
    def track(duration_ms: float, operation: Optional[str] = None) -> bool:
        name = operation or operation_name or "unknown"
        if duration_ms <= threshold_ms:
            return False

        registry.counter(SLOW_OPERATIONS).increment({"operation": name})
        logger.warning(
            f"Slow operation detected: {name} took {duration_ms:.1f}ms "
            f"(threshold: {threshold_ms}ms)"
        )
        return True

    return track

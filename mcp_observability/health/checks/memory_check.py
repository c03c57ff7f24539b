"""
MCP Observability - Memory Health Check
システム全体とプロセスのメモリ使用率チェック
"""

import logging
import os
import time

import psutil

from ...monitoring.system_metrics import effective_memory_limit
from ..types import HealthCheckResult, HealthStatus

logger = logging.getLogger(__name__)


class MemoryHealthCheck:
    """メモリ使用量のヘルスチェック

    システム使用率と、RSS をプロセスのメモリ上限で割った使用率の
    悪い方で判定する。
    """

    def __init__(self, warning_threshold: float = 0.8, critical_threshold: float = 0.9,
                 name: str = "memory"):
        """
        初期化

        Args:
            warning_threshold: DEGRADEDとする使用率
            critical_threshold: UNHEALTHYとする使用率
            name: チェック名
        """
        self.name = name
        self.warning_threshold = warning_threshold
        self.critical_threshold = critical_threshold

    async def check(self) -> HealthCheckResult:
        """メモリ使用率をチェック"""
        start_time = time.perf_counter()

        try:
            memory = psutil.virtual_memory()
            used_memory = memory.total - memory.available
            usage_ratio = used_memory / memory.total

            process_memory = psutil.Process(os.getpid()).memory_info()
            heap_used = process_memory.rss
            heap_total = effective_memory_limit(memory.total)
            heap_ratio = heap_used / heap_total

            # ステータス判定
            if usage_ratio >= self.critical_threshold or heap_ratio >= self.critical_threshold:
                status = HealthStatus.UNHEALTHY
                message = "Critical memory usage detected"
            elif usage_ratio >= self.warning_threshold or heap_ratio >= self.warning_threshold:
                status = HealthStatus.DEGRADED
                message = "High memory usage detected"
            else:
                status = HealthStatus.HEALTHY
                message = "Memory usage is within normal limits"

            return HealthCheckResult(
                status=status,
                message=message,
                duration=(time.perf_counter() - start_time) * 1000,
                details={
                    "system": {
                        "total": memory.total,
                        "used": used_memory,
                        "free": memory.available,
                        "percentage": round(usage_ratio * 100)
                    },
                    "process": {
                        "heap_used": heap_used,
                        "heap_total": heap_total,
                        "heap_percentage": round(heap_ratio * 100),
                        "external": getattr(process_memory, "shared", 0),
                        "rss": process_memory.rss
                    }
                }
            )

        except Exception as e:
            logger.error(f"Memory check failed: {e}")
            return HealthCheckResult(
                status=HealthStatus.UNHEALTHY,
                message=f"Failed to check memory: {str(e)}",
                duration=(time.perf_counter() - start_time) * 1000,
                details={"error": str(e), "error_type": type(e).__name__}
            )

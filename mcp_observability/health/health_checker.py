"""
MCP Observability - Health Checker
登録済みヘルスチェックの並行実行と全体ステータスの集約
"""

import asyncio
import logging
import time
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from ..exceptions import HealthCheckTimeoutError
from ..monitoring.metrics_registry import MetricsRegistry
from .checks import MemoryHealthCheck, DependencyHealthCheck
from .types import (
    HealthCheck,
    HealthCheckResult,
    HealthMetrics,
    HealthStatus,
    MemoryStats,
    SystemHealth,
    STATUS_SEVERITY
)

logger = logging.getLogger(__name__)

HEALTH_CHECKS_TOTAL = "health.checks.total"
HEALTH_CHECK_DURATION = "health.check.duration"


class HealthChecker:
    """ヘルスチェックシステム"""

    def __init__(self,
                 metrics_registry: MetricsRegistry,
                 checks: Optional[Iterable[HealthCheck]] = None,
                 probe_timeout: float = 10.0):
        """
        初期化

        Args:
            metrics_registry: チェック結果を記録するレジストリ
            checks: 登録するチェック。Noneの場合はデフォルトのチェックを登録
            probe_timeout: 1チェックあたりの制限時間（秒）
        """
        self.metrics_registry = metrics_registry
        self.probe_timeout = probe_timeout
        self._checks: Dict[str, HealthCheck] = {}

        if checks is None:
            self._register_default_checks()
        else:
            for check in checks:
                self.register_check(check)

        logger.info(f"HealthChecker initialized with checks: {self.get_check_names()}")

    def _register_default_checks(self) -> None:
        """デフォルトのヘルスチェックを登録"""
        self.register_check(MemoryHealthCheck())
        self.register_check(DependencyHealthCheck())

    def register_check(self, check: HealthCheck) -> None:
        """ヘルスチェックを登録（同名は上書き）"""
        self._checks[check.name] = check
        logger.debug(f"Health check registered: {check.name}")

    def unregister_check(self, name: str) -> bool:
        """ヘルスチェックを削除"""
        if name in self._checks:
            del self._checks[name]
            logger.debug(f"Health check unregistered: {name}")
            return True
        return False

    def get_check_names(self) -> List[str]:
        return list(self._checks)

    async def check_health(self) -> SystemHealth:
        """全ヘルスチェックを並行実行して集約"""
        tasks = {
            name: asyncio.ensure_future(self._run_check(name, check))
            for name, check in self._checks.items()
        }
        if tasks:
            try:
                await asyncio.wait(tasks.values())
            except asyncio.CancelledError:
                for task in tasks.values():
                    task.cancel()
                raise

        check_results: Dict[str, HealthCheckResult] = {
            name: self._task_result(name, task) for name, task in tasks.items()
        }

        for name, result in check_results.items():
            self._record_metrics(name, result)

        overall_status = self._determine_overall_status(check_results.values())
        if overall_status != HealthStatus.HEALTHY:
            logger.warning(f"System health is {overall_status.value}")

        return SystemHealth(
            status=overall_status,
            timestamp=datetime.now().isoformat(),
            checks=check_results,
            metrics=self._collect_health_metrics()
        )

    async def _run_check(self, name: str, check: HealthCheck) -> HealthCheckResult:
        """1件のチェックを制限時間付きで実行（例外は結果に変換）"""
        start_time = time.perf_counter()

        try:
            try:
                result = await asyncio.wait_for(check.check(), timeout=self.probe_timeout)
            except asyncio.TimeoutError:
                raise HealthCheckTimeoutError(name, self.probe_timeout)

        except HealthCheckTimeoutError as e:
            logger.error(f"Health check timed out: {name}")
            return HealthCheckResult(
                status=HealthStatus.UNHEALTHY,
                message=e.message,
                duration=(time.perf_counter() - start_time) * 1000,
                details={"error": e.message, "error_type": type(e).__name__}
            )

        except Exception as e:
            logger.error(f"Health check failed: {name}, error: {e}")
            return HealthCheckResult(
                status=HealthStatus.UNHEALTHY,
                message=f"Check failed with error: {str(e)}",
                duration=0.0,
                details={"error": str(e), "error_type": type(e).__name__}
            )

        logger.debug(f"Health check completed: {name} = {result.status.value}")
        return result

    @staticmethod
    def _task_result(name: str, task: "asyncio.Future[HealthCheckResult]") -> HealthCheckResult:
        """チェックのタスク結果を取得

        チェック自身が CancelledError を送出した場合、タスクはキャンセル扱いで
        終わるので UNHEALTHY の結果に変換する。
        """
        if not task.cancelled():
            return task.result()

        logger.error(f"Health check cancelled: {name}")
        return HealthCheckResult(
            status=HealthStatus.UNHEALTHY,
            message="Check failed with error: check was cancelled",
            duration=0.0,
            details={"error": "check was cancelled", "error_type": "CancelledError"}
        )

    def _record_metrics(self, name: str, result: HealthCheckResult) -> None:
        self.metrics_registry.counter(HEALTH_CHECKS_TOTAL).increment(
            {"check": name, "status": result.status.value}
        )
        self.metrics_registry.histogram(HEALTH_CHECK_DURATION).observe(
            result.duration, {"check": name}
        )

    @staticmethod
    def _determine_overall_status(results: Iterable[HealthCheckResult]) -> HealthStatus:
        """最も悪いステータスを全体ステータスとする"""
        overall = HealthStatus.HEALTHY
        for result in results:
            if STATUS_SEVERITY[result.status] > STATUS_SEVERITY[overall]:
                overall = result.status
        return overall

    def _collect_health_metrics(self) -> HealthMetrics:
        """ヘルス結果に添付するシステムメトリクスを収集"""
        system = self.metrics_registry.collect_system_metrics()
        memory = system.memory_usage
        percentage = round(memory.heap_used / memory.heap_total * 100) if memory.heap_total else 0

        return HealthMetrics(
            uptime=system.uptime,
            memory=MemoryStats(
                used=memory.heap_used,
                total=memory.heap_total,
                percentage=percentage
            ),
            cpu=round(system.cpu_usage)
        )

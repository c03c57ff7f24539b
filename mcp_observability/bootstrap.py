"""
MCP Observability - Bootstrap
プロセス全体で共有する監視コンポーネントの組み立て
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .config import MonitoringSettings
from .health import HealthChecker, MemoryHealthCheck, DependencyHealthCheck
from .middleware import MetricsMiddleware
from .monitoring import MetricsRegistry

logger = logging.getLogger(__name__)


@dataclass
class Observability:
    """監視コンポーネント一式"""
    settings: MonitoringSettings
    metrics: MetricsRegistry
    health: HealthChecker
    middleware: MetricsMiddleware


def build_observability(settings: Optional[MonitoringSettings] = None) -> Observability:
    """設定から監視コンポーネントを組み立てる

    プロセス起動時に1回呼び出し、返したインスタンスを各ハンドラーへ渡す。
    """
    settings = settings or MonitoringSettings()

    metrics = MetricsRegistry(histogram_capacity=settings.histogram_capacity)

    checks = [
        MemoryHealthCheck(
            warning_threshold=settings.memory_warning_threshold,
            critical_threshold=settings.memory_critical_threshold
        )
    ]
    if settings.enable_dependency_check:
        checks.append(DependencyHealthCheck(
            name=settings.dependency_name,
            url=settings.dependency_url,
            timeout_seconds=settings.dependency_timeout_seconds,
            user_agent=settings.user_agent
        ))

    health = HealthChecker(
        metrics,
        checks=checks,
        probe_timeout=settings.probe_timeout_seconds
    )
    middleware = MetricsMiddleware(
        metrics,
        slow_operation_threshold=settings.slow_operation_threshold_ms
    )

    logger.info("Observability components built")
    return Observability(settings=settings, metrics=metrics, health=health, middleware=middleware)

"""
MCP Observability - Health Module
ヘルスチェックの登録・並行実行・ステータス集約
"""

from .types import (
    HealthStatus,
    HealthCheck,
    HealthCheckResult,
    HealthMetrics,
    MemoryStats,
    SystemHealth
)
from .health_checker import (
    HealthChecker,
    HEALTH_CHECKS_TOTAL,
    HEALTH_CHECK_DURATION
)
from .checks import MemoryHealthCheck, DependencyHealthCheck

__all__ = [
    # Types
    'HealthStatus',
    'HealthCheck',
    'HealthCheckResult',
    'HealthMetrics',
    'MemoryStats',
    'SystemHealth',

    # Checker
    'HealthChecker',
    'HEALTH_CHECKS_TOTAL',
    'HEALTH_CHECK_DURATION',

    # Checks
    'MemoryHealthCheck',
    'DependencyHealthCheck'
]

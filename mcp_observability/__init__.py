"""
MCP Observability
MCPサーバー向けのプロセス内メトリクスとヘルスチェック

Version: 1.0.0
"""

__version__ = "1.0.0"

from .bootstrap import Observability, build_observability
from .config import MonitoringSettings, load_settings
from .exceptions import ObservabilityError, ConfigurationError, HealthCheckTimeoutError
from .health import HealthChecker, HealthStatus, SystemHealth
from .middleware import MetricsMiddleware
from .monitoring import MetricsRegistry, SystemMetricsCollector

__all__ = [
    "Observability",
    "build_observability",
    "MonitoringSettings",
    "load_settings",
    "ObservabilityError",
    "ConfigurationError",
    "HealthCheckTimeoutError",
    "HealthChecker",
    "HealthStatus",
    "SystemHealth",
    "MetricsMiddleware",
    "MetricsRegistry",
    "SystemMetricsCollector"
]

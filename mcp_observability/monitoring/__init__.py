"""
MCP Observability - Monitoring Module
カウンター・ゲージ・ヒストグラムとシステムメトリクス収集
"""

from .counter import Counter
from .gauge import Gauge
from .histogram import Histogram, DEFAULT_CAPACITY
from .labels import labels_to_key, key_to_labels
from .system_metrics import SystemMetricsCollector, effective_memory_limit
from .metrics_registry import (
    MetricsRegistry,
    REQUESTS_TOTAL,
    REQUESTS_ERRORS,
    REQUEST_DURATION,
    CONNECTIONS_ACTIVE
)
from .timing import measure_duration, track_slow_operation, SLOW_OPERATIONS
from .types import (
    MetricValue,
    HistogramStats,
    MemoryUsage,
    SystemMetrics,
    SystemInfo,
    MetricsSnapshot
)

__all__ = [
    # Instruments
    'Counter',
    'Gauge',
    'Histogram',
    'DEFAULT_CAPACITY',
    'labels_to_key',
    'key_to_labels',

    # Registry
    'MetricsRegistry',
    'SystemMetricsCollector',
    'effective_memory_limit',
    'REQUESTS_TOTAL',
    'REQUESTS_ERRORS',
    'REQUEST_DURATION',
    'CONNECTIONS_ACTIVE',

    # Helpers
    'measure_duration',
    'track_slow_operation',
    'SLOW_OPERATIONS',

    # Types
    'MetricValue',
    'HistogramStats',
    'MemoryUsage',
    'SystemMetrics',
    'SystemInfo',
    'MetricsSnapshot'
]

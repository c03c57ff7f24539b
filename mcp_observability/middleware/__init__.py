"""
MCP Observability - Middleware Module
ツールハンドラー向けの計測ラッパー
"""

from .metrics_middleware import (
    MetricsMiddleware,
    DEPENDENCY_CALLS,
    DEPENDENCY_ERRORS,
    DEPENDENCY_RESPONSE_TIME,
    CACHE_HITS,
    CACHE_MISSES,
    CACHE_SIZE
)

__all__ = [
    'MetricsMiddleware',
    'DEPENDENCY_CALLS',
    'DEPENDENCY_ERRORS',
    'DEPENDENCY_RESPONSE_TIME',
    'CACHE_HITS',
    'CACHE_MISSES',
    'CACHE_SIZE'
]

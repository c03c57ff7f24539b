"""
MCP Observability - Health Checks
組み込みのヘルスチェック実装
"""

from .memory_check import MemoryHealthCheck
from .dependency_check import DependencyHealthCheck, DEFAULT_ENDPOINT, DEFAULT_USER_AGENT

__all__ = [
    'MemoryHealthCheck',
    'DependencyHealthCheck',
    'DEFAULT_ENDPOINT',
    'DEFAULT_USER_AGENT'
]

"""
MCP Observability - テスト共通フィクスチャ
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from mcp_observability.monitoring import MetricsRegistry


@pytest.fixture
def registry():
    """MetricsRegistryのテストインスタンス"""
    return MetricsRegistry()


@pytest.fixture
def fake_psutil():
    """メモリ使用率を指定できるpsutilのモック"""
    def build(system_used_ratio: float, heap_ratio: float):
        mock = MagicMock()
        total = 1000
        mock.virtual_memory.return_value = SimpleNamespace(
            total=total,
            available=total - int(total * system_used_ratio)
        )
        mock.Process.return_value.memory_info.return_value = SimpleNamespace(
            rss=int(1000 * heap_ratio),
            shared=10
        )
        return mock

    return build

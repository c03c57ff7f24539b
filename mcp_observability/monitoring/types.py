"""
MCP Observability - Metric Types
メトリクス読み出し結果のデータ型
"""

from dataclasses import dataclass, asdict
from typing import Dict, List, Optional, Any, Tuple


@dataclass(frozen=True)
class MetricValue:
    """カウンター・ゲージの読み出し値"""
    value: float
    timestamp: str
    labels: Optional[Dict[str, str]] = None


@dataclass(frozen=True)
class HistogramStats:
    """ヒストグラム統計"""
    count: int = 0
    mean: float = 0.0
    p50: float = 0.0
    p90: float = 0.0
    p95: float = 0.0
    p99: float = 0.0


@dataclass(frozen=True)
class MemoryUsage:
    """プロセスメモリ使用量（バイト）"""
    heap_used: int
    heap_total: int
    external: int
    rss: int


@dataclass(frozen=True)
class SystemMetrics:
    """プロセスのシステムメトリクス"""
    cpu_usage: float
    memory_usage: MemoryUsage
    uptime: float


@dataclass(frozen=True)
class SystemInfo:
    """OSの静的情報"""
    platform: str
    arch: str
    python_version: str
    cpu_count: int
    total_memory: int
    free_memory: int
    load_average: Tuple[float, float, float]


@dataclass(frozen=True)
class MetricsSnapshot:
    """ある時点のメトリクス全体"""
    timestamp: str
    counters: Dict[str, List[MetricValue]]
    gauges: Dict[str, List[MetricValue]]
    histograms: Dict[str, HistogramStats]
    system: SystemMetrics

    def to_dict(self) -> Dict[str, Any]:
        """辞書形式に変換"""
        return asdict(self)

    def total(self, counter_name: str) -> float:
        """カウンターの全ラベル合計値"""
        return sum(v.value for v in self.counters.get(counter_name, []))

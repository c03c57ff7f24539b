"""
MCP Observability - Metrics Registry
名前付きメトリクスの管理とスナップショット取得
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from .counter import Counter
from .gauge import Gauge
from .histogram import Histogram, DEFAULT_CAPACITY
from .system_metrics import SystemMetricsCollector
from .types import MetricsSnapshot, SystemMetrics, SystemInfo

logger = logging.getLogger(__name__)

# ダッシュボード用に常に存在させるメトリクス
REQUESTS_TOTAL = "requests.total"
REQUESTS_ERRORS = "requests.errors"
REQUEST_DURATION = "request.duration"
CONNECTIONS_ACTIVE = "connections.active"


class MetricsRegistry:
    """メトリクスレジストリ

    同じ名前には常に同じインスタンスを返す。未知の名前は
    エラーにせず値0のメトリクスを新規作成する。
    """

    def __init__(self,
                 system_collector: Optional[SystemMetricsCollector] = None,
                 histogram_capacity: int = DEFAULT_CAPACITY):
        """
        初期化

        Args:
            system_collector: システムメトリクス収集器
            histogram_capacity: ヒストグラムの標本数上限
        """
        self.system_collector = system_collector or SystemMetricsCollector()
        self.histogram_capacity = histogram_capacity

        self._counters: Dict[str, Counter] = {}
        self._gauges: Dict[str, Gauge] = {}
        self._histograms: Dict[str, Histogram] = {}

        self._initialize_default_metrics()

        logger.info("MetricsRegistry initialized")

    def _initialize_default_metrics(self) -> None:
        self.counter(REQUESTS_TOTAL)
        self.counter(REQUESTS_ERRORS)
        self.histogram(REQUEST_DURATION)
        self.gauge(CONNECTIONS_ACTIVE)

    def counter(self, name: str) -> Counter:
        """カウンターを取得（なければ作成）"""
        if name not in self._counters:
            self._counters[name] = Counter(name)
            logger.debug(f"Counter created: {name}")
        return self._counters[name]

    def gauge(self, name: str) -> Gauge:
        """ゲージを取得（なければ作成）"""
        if name not in self._gauges:
            self._gauges[name] = Gauge(name)
            logger.debug(f"Gauge created: {name}")
        return self._gauges[name]

    def histogram(self, name: str) -> Histogram:
        """ヒストグラムを取得（なければ作成）"""
        if name not in self._histograms:
            self._histograms[name] = Histogram(name, capacity=self.histogram_capacity)
            logger.debug(f"Histogram created: {name}")
        return self._histograms[name]

    def list_metrics(self) -> Dict[str, List[str]]:
        """登録済みメトリクス名の一覧"""
        return {
            "counters": sorted(self._counters),
            "gauges": sorted(self._gauges),
            "histograms": sorted(self._histograms)
        }

    def get_snapshot(self) -> MetricsSnapshot:
        """全メトリクスの現在値をまとめて取得"""
        return MetricsSnapshot(
            timestamp=datetime.now().isoformat(),
            counters={name: counter.get_all_values() for name, counter in self._counters.items()},
            gauges={name: gauge.get_all_values() for name, gauge in self._gauges.items()},
            histograms={name: histogram.get_stats() for name, histogram in self._histograms.items()},
            system=self.system_collector.collect()
        )

    def collect_system_metrics(self) -> SystemMetrics:
        return self.system_collector.collect()

    def get_system_info(self) -> SystemInfo:
        return self.system_collector.get_system_info()

    def reset(self) -> None:
        """カウンターとヒストグラムをリセット（ゲージは現在状態なので対象外）"""
        for counter in self._counters.values():
            counter.reset()
        for histogram in self._histograms.values():
            histogram.reset()

        logger.info("Metrics reset")

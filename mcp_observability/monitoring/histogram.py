"""
MCP Observability - Histogram
リザーバーサンプリングによるメモリ上限付きヒストグラム
"""

import math
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .labels import Labels, labels_to_key
from .types import HistogramStats

DEFAULT_CAPACITY = 10000


@dataclass
class _HistogramData:
    """ラベル別の集計データ"""
    count: int = 0
    sum: float = 0.0
    samples: List[float] = field(default_factory=list)


class Histogram:
    """分布を記録するヒストグラム

    count と sum は全観測値の正確な累計。samples は容量を超えると
    一様リザーバーサンプリングで置き換えられる近似標本で、
    パーセンタイル推定にのみ使う。
    """

    def __init__(self, name: str, capacity: int = DEFAULT_CAPACITY,
                 rng: Optional[random.Random] = None):
        """
        初期化

        Args:
            name: メトリクス名
            capacity: ラベルごとに保持する標本数の上限
            rng: 乱数生成器（テストでシード固定する場合に指定）
        """
        self.name = name
        self.capacity = capacity
        self._rng = rng or random.Random()
        self._data: Dict[str, _HistogramData] = {}

    def observe(self, value: float, labels: Labels = None) -> None:
        """値を1件記録"""
        key = labels_to_key(labels)
        data = self._data.get(key)
        if data is None:
            data = _HistogramData()
            self._data[key] = data

        data.count += 1
        data.sum += value

        if len(data.samples) < self.capacity:
            data.samples.append(value)
        else:
            # Algorithm R: n件目は capacity/n の確率で標本に残る
            slot = self._rng.randrange(data.count)
            if slot < self.capacity:
                data.samples[slot] = value

    def get_percentile(self, percentile: float) -> float:
        """全ラベルを合わせた標本からパーセンタイル値を取得"""
        return self._percentile_of(sorted(self._all_samples()), percentile)

    def get_mean(self) -> float:
        total_count = self.get_count()
        if total_count == 0:
            return 0.0
        return sum(data.sum for data in self._data.values()) / total_count

    def get_count(self) -> int:
        """観測件数（標本数ではなく正確な累計）"""
        return sum(data.count for data in self._data.values())

    def get_sample_size(self) -> int:
        """保持している標本数"""
        return sum(len(data.samples) for data in self._data.values())

    def get_stats(self) -> HistogramStats:
        """件数・平均・主要パーセンタイルをまとめて取得"""
        samples = sorted(self._all_samples())
        if not samples:
            return HistogramStats()

        return HistogramStats(
            count=self.get_count(),
            mean=self.get_mean(),
            p50=self._percentile_of(samples, 50),
            p90=self._percentile_of(samples, 90),
            p95=self._percentile_of(samples, 95),
            p99=self._percentile_of(samples, 99)
        )

    def reset(self) -> None:
        """全ラベルのデータを破棄"""
        self._data.clear()

    def _all_samples(self) -> List[float]:
        samples: List[float] = []
        for data in self._data.values():
            samples.extend(data.samples)
        return samples

    @staticmethod
    def _percentile_of(sorted_samples: List[float], percentile: float) -> float:
        """ソート済み標本から nearest-rank 法でパーセンタイル値を取得"""
        if not sorted_samples:
            return 0.0

        index = math.ceil(percentile * len(sorted_samples) / 100.0) - 1
        index = max(0, min(index, len(sorted_samples) - 1))
        return sorted_samples[index]

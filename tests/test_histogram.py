"""
MCP Observability - Histogram Tests
ヒストグラムとリザーバーサンプリングのテスト
"""

import math
import random

import pytest

from mcp_observability.monitoring import Histogram, HistogramStats


class TestHistogram:
    """Histogramのテストクラス"""

    def setup_method(self):
        self.histogram = Histogram("request.duration", rng=random.Random(42))

    def test_empty_histogram(self):
        """観測値がない場合は全て0"""
        assert self.histogram.get_percentile(50) == 0
        assert self.histogram.get_mean() == 0
        assert self.histogram.get_count() == 0
        assert self.histogram.get_stats() == HistogramStats()

    def test_percentile_nearest_rank(self):
        """ceil(p/100 * n) - 1 のインデックスを選択"""
        for value in [5, 1, 4, 2, 3, 10, 9, 8, 7, 6]:
            self.histogram.observe(value)

        assert self.histogram.get_percentile(50) == 5
        assert self.histogram.get_percentile(90) == 9
        assert self.histogram.get_percentile(99) == 10
        assert self.histogram.get_percentile(100) == 10
        # インデックスは [0, n-1] に収める
        assert self.histogram.get_percentile(0) == 1

    def test_percentile_spans_all_labels(self):
        """パーセンタイルは全ラベルの標本を合わせて計算"""
        self.histogram.observe(1, {"tool": "a"})
        self.histogram.observe(2, {"tool": "a"})
        self.histogram.observe(100, {"tool": "b"})

        assert self.histogram.get_percentile(100) == 100
        assert self.histogram.get_percentile(50) == 2

    def test_percentile_monotonic(self):
        """p90 >= p50"""
        rng = random.Random(7)
        for _ in range(500):
            self.histogram.observe(rng.expovariate(0.01))

        assert self.histogram.get_percentile(90) >= self.histogram.get_percentile(50)
        stats = self.histogram.get_stats()
        assert stats.p50 <= stats.p90 <= stats.p95 <= stats.p99

    def test_mean_uses_exact_totals(self):
        """平均は count/sum の累計から計算"""
        self.histogram.observe(10, {"tool": "a"})
        self.histogram.observe(20, {"tool": "b"})
        self.histogram.observe(30, {"tool": "b"})

        assert self.histogram.get_mean() == pytest.approx(20.0)

    def test_stats_bundle(self):
        for value in range(1, 101):
            self.histogram.observe(value)

        stats = self.histogram.get_stats()
        assert stats.count == 100
        assert stats.mean == pytest.approx(50.5)
        assert (stats.p50, stats.p90, stats.p95, stats.p99) == (50, 90, 95, 99)

    def test_count_below_capacity(self):
        """容量以下では count と標本数が一致"""
        for value in range(250):
            self.histogram.observe(value)

        assert self.histogram.get_count() == 250
        assert self.histogram.get_stats().count == 250
        assert self.histogram.get_sample_size() == 250

    def test_reservoir_caps_sample_size(self):
        """容量を超えても count は正確で標本数は上限で止まる"""
        histogram = Histogram("latency", capacity=100, rng=random.Random(1))
        for value in range(1000):
            histogram.observe(value)

        assert histogram.get_count() == 1000
        assert histogram.get_stats().count == 1000
        assert histogram.get_sample_size() == 100
        assert histogram.get_mean() == pytest.approx(499.5)

    def test_reservoir_sample_is_representative(self):
        """標本が後半の観測値に偏らない"""
        histogram = Histogram("latency", capacity=1000, rng=random.Random(3))
        for value in range(20000):
            histogram.observe(value)

        median = histogram.get_percentile(50)
        assert 8000 < median < 12000

    def test_default_capacity(self):
        assert Histogram("x").capacity == 10000

    def test_reset_clears_everything(self):
        self.histogram.observe(1, {"tool": "a"})
        self.histogram.observe(2)

        self.histogram.reset()

        assert self.histogram.get_count() == 0
        assert self.histogram.get_sample_size() == 0
        assert self.histogram.get_percentile(50) == 0

    def test_nan_is_accepted(self):
        """NaN も例外にならず受け付ける"""
        self.histogram.observe(float("nan"))
        self.histogram.observe(1.0)

        assert self.histogram.get_count() == 2
        assert math.isnan(self.histogram.get_mean())

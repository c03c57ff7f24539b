"""
MCP Observability - Bootstrap Tests
監視コンポーネント組み立てのテスト
"""

from mcp_observability import build_observability, MonitoringSettings
from mcp_observability.health import DependencyHealthCheck, MemoryHealthCheck


class TestBuildObservability:
    """build_observabilityのテストクラス"""

    def test_defaults(self):
        observability = build_observability()

        assert observability.settings == MonitoringSettings()
        assert sorted(observability.health.get_check_names()) == ["memory", "nws-api"]
        assert observability.middleware.metrics_registry is observability.metrics
        assert observability.health.metrics_registry is observability.metrics

    def test_dependency_check_disabled(self):
        settings = MonitoringSettings(enable_dependency_check=False)

        observability = build_observability(settings)

        assert observability.health.get_check_names() == ["memory"]

    def test_settings_applied(self):
        """設定値が各コンポーネントへ渡される"""
        settings = MonitoringSettings(
            slow_operation_threshold_ms=250,
            histogram_capacity=64,
            probe_timeout_seconds=3,
            memory_warning_threshold=0.6,
            memory_critical_threshold=0.7,
            dependency_name="upstream",
            dependency_url="http://localhost:9/health",
            dependency_timeout_seconds=1.5
        )

        observability = build_observability(settings)

        memory = observability.health._checks["memory"]
        assert isinstance(memory, MemoryHealthCheck)
        assert memory.warning_threshold == 0.6
        assert memory.critical_threshold == 0.7

        dependency = observability.health._checks["upstream"]
        assert isinstance(dependency, DependencyHealthCheck)
        assert dependency.url == "http://localhost:9/health"
        assert dependency.timeout_seconds == 1.5

        assert observability.health.probe_timeout == 3
        assert observability.middleware.slow_operation_threshold == 250
        assert observability.metrics.histogram("custom").capacity == 64

    def test_instances_are_independent(self):
        first = build_observability()
        second = build_observability()

        first.metrics.counter("requests.total").increment()

        assert second.metrics.counter("requests.total").get() == 0

"""
MCP Observability - Report Formatters
ヘルスチェック結果・メトリクスのテキスト整形
"""

import json
from typing import List

from ..health.types import HealthStatus, SystemHealth
from ..monitoring.metrics_registry import REQUESTS_TOTAL, REQUESTS_ERRORS, REQUEST_DURATION
from ..monitoring.types import MetricsSnapshot, SystemInfo

STATUS_ICONS = {
    HealthStatus.HEALTHY: "✅",
    HealthStatus.DEGRADED: "⚠️",
    HealthStatus.UNHEALTHY: "❌",
}


def format_bytes(size: float) -> str:
    """バイト数を読みやすい単位に変換"""
    units = ["B", "KB", "MB", "GB"]
    unit_index = 0

    while size >= 1024 and unit_index < len(units) - 1:
        size /= 1024
        unit_index += 1

    return f"{size:.2f} {units[unit_index]}"


def format_duration(ms: float) -> str:
    if ms < 1000:
        return f"{ms:.0f}ms"
    if ms < 60000:
        return f"{ms / 1000:.1f}s"
    return f"{ms / 60000:.1f}m"


def format_labels(labels) -> str:
    return ", ".join(f"{key}={value}" for key, value in sorted(labels.items()))


def format_health_summary(health: SystemHealth) -> str:
    """ヘルスチェック結果を整形"""
    lines: List[str] = [
        f"## Overall Status: {health.status.value.upper()}",
        f"Timestamp: {health.timestamp}",
        "",
        "### Health Checks:"
    ]

    for name, result in health.checks.items():
        icon = STATUS_ICONS.get(result.status, "")
        lines.append(f"- {icon} **{name}**: {result.status.value} ({result.duration:.0f}ms)")
        if result.message:
            lines.append(f"  - {result.message}")
        if result.details:
            details = json.dumps(result.details, ensure_ascii=False, indent=2)
            lines.append(f"  - Details: {details.replace(chr(10), chr(10) + '    ')}")

    if health.metrics:
        lines.extend([
            "",
            "### System Metrics:",
            f"- **Uptime**: {int(health.metrics.uptime // 60)} minutes",
            f"- **Memory**: {health.metrics.memory.percentage}% "
            f"({format_bytes(health.metrics.memory.used)} / {format_bytes(health.metrics.memory.total)})",
            f"- **CPU**: {health.metrics.cpu}%"
        ])

    return "\n".join(lines)


def format_metrics_summary(snapshot: MetricsSnapshot) -> str:
    """メトリクススナップショットを整形"""
    lines: List[str] = ["### Counters:"]

    for name, values in snapshot.counters.items():
        if not values:
            continue
        lines.append(f"- **{name}**: {snapshot.total(name):g}")
        for value in values:
            if value.labels:
                lines.append(f"  - {{{format_labels(value.labels)}}}: {value.value:g}")

    lines.extend(["", "### Response Times:"])
    for name, stats in snapshot.histograms.items():
        if stats.count == 0:
            continue
        lines.extend([
            f"- **{name}**:",
            f"  - Count: {stats.count}",
            f"  - Mean: {stats.mean:.2f}ms",
            f"  - P50: {stats.p50:.2f}ms",
            f"  - P90: {stats.p90:.2f}ms",
            f"  - P95: {stats.p95:.2f}ms",
            f"  - P99: {stats.p99:.2f}ms"
        ])

    lines.extend(["", "### Current Values:"])
    for name, values in snapshot.gauges.items():
        for value in values:
            if value.labels:
                lines.append(f"- **{name}** {{{format_labels(value.labels)}}}: {value.value:g}")
            else:
                lines.append(f"- **{name}**: {value.value:g}")

    return "\n".join(lines)


def format_system_info(info: SystemInfo) -> str:
    """OS情報を整形"""
    free_percentage = round(info.free_memory / info.total_memory * 100) if info.total_memory else 0
    load_average = ", ".join(f"{value:.2f}" for value in info.load_average)

    return "\n".join([
        f"- **Platform**: {info.platform} ({info.arch})",
        f"- **Python Version**: {info.python_version}",
        f"- **CPU Count**: {info.cpu_count}",
        f"- **Total Memory**: {format_bytes(info.total_memory)}",
        f"- **Free Memory**: {format_bytes(info.free_memory)} ({free_percentage}%)",
        f"- **Load Average**: {load_average}"
    ])


def format_dashboard(snapshot: MetricsSnapshot, info: SystemInfo) -> str:
    """メトリクスダッシュボードを整形"""
    system = snapshot.system
    total_requests = snapshot.total(REQUESTS_TOTAL)
    total_errors = snapshot.total(REQUESTS_ERRORS)
    error_rate = (total_errors / total_requests * 100) if total_requests else 0.0

    lines = [
        "=" * 60,
        "MCP Server - Metrics Dashboard",
        "=" * 60,
        f"Last Updated: {snapshot.timestamp}",
        "",
        "📊 System Information",
        "-" * 60,
        format_system_info(info),
        "",
        "💻 System Metrics",
        "-" * 60,
        f"CPU Usage: {system.cpu_usage:.1f}%",
        f"Heap Used: {format_bytes(system.memory_usage.heap_used)}",
        f"Heap Total: {format_bytes(system.memory_usage.heap_total)}",
        f"RSS: {format_bytes(system.memory_usage.rss)}",
        f"Uptime: {format_duration(system.uptime * 1000)}",
        "",
        "📈 Request Metrics",
        "-" * 60,
        f"Total Requests: {total_requests:g}",
        f"Total Errors: {total_errors:g}",
        f"Error Rate: {error_rate:.2f}%"
    ]

    requests_by_tool = {}
    for value in snapshot.counters.get(REQUESTS_TOTAL, []):
        tool = (value.labels or {}).get("tool")
        if tool:
            requests_by_tool[tool] = requests_by_tool.get(tool, 0) + value.value
    if requests_by_tool:
        lines.extend(["", "Requests by Tool:"])
        lines.extend(f"  {tool}: {count:g}" for tool, count in requests_by_tool.items())

    stats = snapshot.histograms.get(REQUEST_DURATION)
    if stats and stats.count > 0:
        lines.extend([
            "",
            "⏱️  Response Times",
            "-" * 60,
            f"Mean: {format_duration(stats.mean)}",
            f"P50: {format_duration(stats.p50)}",
            f"P90: {format_duration(stats.p90)}",
            f"P95: {format_duration(stats.p95)}",
            f"P99: {format_duration(stats.p99)}"
        ])

    lines.extend(["", "=" * 60])
    return "\n".join(lines)

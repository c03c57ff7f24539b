"""
MCP Observability - Health Types
ヘルスチェックのステータスと結果の型
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Any, Protocol, runtime_checkable


class HealthStatus(Enum):
    """ヘルスステータス"""
    HEALTHY = "healthy"          # 正常
    DEGRADED = "degraded"        # 機能低下
    UNHEALTHY = "unhealthy"      # 異常


# 全体ステータス決定時の優先順位（大きいほど悪い）
STATUS_SEVERITY = {
    HealthStatus.HEALTHY: 0,
    HealthStatus.DEGRADED: 1,
    HealthStatus.UNHEALTHY: 2,
}


@dataclass
class HealthCheckResult:
    """1回のヘルスチェック結果"""
    status: HealthStatus
    message: Optional[str] = None
    duration: float = 0.0
    timestamp: Optional[str] = None
    details: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = datetime.now().isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """辞書形式に変換"""
        data = asdict(self)
        data["status"] = self.status.value
        return data


@runtime_checkable
class HealthCheck(Protocol):
    """ヘルスチェックのインターフェース

    name 属性と非同期の check() を持つオブジェクトであればよい。
    """
    name: str

    async def check(self) -> HealthCheckResult:
        ...


@dataclass
class MemoryStats:
    """ヘルス結果に添付するメモリ使用量"""
    used: int
    total: int
    percentage: int


@dataclass
class HealthMetrics:
    """ヘルス結果に添付するシステムメトリクス"""
    uptime: float
    memory: MemoryStats
    cpu: int


@dataclass
class SystemHealth:
    """システム全体のヘルス情報"""
    status: HealthStatus
    timestamp: str
    checks: Dict[str, HealthCheckResult]
    metrics: Optional[HealthMetrics] = None

    def to_dict(self) -> Dict[str, Any]:
        """辞書形式に変換"""
        return {
            "status": self.status.value,
            "timestamp": self.timestamp,
            "checks": {name: result.to_dict() for name, result in self.checks.items()},
            "metrics": asdict(self.metrics) if self.metrics else None
        }

"""
MCP Observability - System Metrics Collector
プロセス・OSレベルのCPU/メモリ使用量の収集
"""

import logging
import os
import platform
import time
from pathlib import Path
from typing import Callable, Optional, Tuple

import psutil

from .types import MemoryUsage, SystemMetrics, SystemInfo

logger = logging.getLogger(__name__)

# cgroup v2, v1 の順に参照するメモリ上限ファイル
CGROUP_MEMORY_LIMIT_FILES = (
    Path("/sys/fs/cgroup/memory.max"),
    Path("/sys/fs/cgroup/memory/memory.limit_in_bytes"),
)


def _read_cgroup_limit() -> Optional[int]:
    """cgroupのメモリ上限（未設定なら None）"""
    for path in CGROUP_MEMORY_LIMIT_FILES:
        try:
            value = path.read_text(encoding="utf-8").strip()
        except OSError:
            continue
        if value.isdigit():
            return int(value)
        # "max" は上限なし
        return None
    return None


def _read_address_space_limit() -> Optional[int]:
    """RLIMIT_AS のソフトリミット（未設定・非対応なら None）"""
    rlimit_as = getattr(psutil, "RLIMIT_AS", None)
    if rlimit_as is None:
        return None

    try:
        soft, _hard = psutil.Process(os.getpid()).rlimit(rlimit_as)
    except (psutil.Error, OSError) as e:
        logger.debug(f"RLIMIT_AS unavailable: {e}")
        return None

    if soft == psutil.RLIM_INFINITY or soft <= 0:
        return None
    return soft


def effective_memory_limit(system_total: int) -> int:
    """プロセスが使えるメモリの上限（バイト）

    cgroup の上限または RLIMIT_AS が設定されていればそれを、
    なければ物理メモリ総量を返す。
    """
    limits = [system_total]
    for limit in (_read_cgroup_limit(), _read_address_space_limit()):
        if limit:
            limits.append(limit)
    return min(limits)


class SystemMetricsCollector:
    """システムメトリクス収集

    CPU使用率は前回の collect() からのプロセスCPU時間の増分を
    経過時間で割った割合として計算する。heap_total はプロセスが
    使えるメモリの上限（effective_memory_limit）。
    """

    def __init__(self, process: Optional[psutil.Process] = None,
                 clock: Callable[[], float] = time.monotonic):
        """
        初期化

        Args:
            process: 計測対象プロセス。Noneの場合は自プロセス
            clock: 経過時間の計測に使う単調増加クロック（秒）
        """
        self.process = process or psutil.Process(os.getpid())
        self.clock = clock
        self._last_cpu_time: Optional[float] = None
        self._last_wall_time: Optional[float] = None

    def collect(self) -> SystemMetrics:
        """CPU・メモリ・稼働時間を収集"""
        cpu_usage = self._get_cpu_usage()
        memory_info = self.process.memory_info()

        return SystemMetrics(
            cpu_usage=cpu_usage,
            memory_usage=MemoryUsage(
                heap_used=memory_info.rss,
                heap_total=effective_memory_limit(psutil.virtual_memory().total),
                # shared は Linux のみ
                external=getattr(memory_info, "shared", 0),
                rss=memory_info.rss
            ),
            uptime=max(0.0, time.time() - self.process.create_time())
        )

    def _get_cpu_usage(self) -> float:
        """前回呼び出しからのCPU使用率（0-100、コア数で正規化）"""
        cpu_times = self.process.cpu_times()
        current_cpu_time = cpu_times.user + cpu_times.system
        current_wall_time = self.clock()

        if self._last_cpu_time is None or self._last_wall_time is None:
            self._last_cpu_time = current_cpu_time
            self._last_wall_time = current_wall_time
            return 0.0

        elapsed_wall = current_wall_time - self._last_wall_time
        elapsed_cpu = current_cpu_time - self._last_cpu_time

        self._last_cpu_time = current_cpu_time
        self._last_wall_time = current_wall_time

        if elapsed_wall <= 0:
            return 0.0

        cpu_percent = (100.0 * elapsed_cpu) / elapsed_wall
        cpu_count = psutil.cpu_count(logical=True) or 1
        return max(0.0, min(100.0, cpu_percent / cpu_count))

    def get_system_info(self) -> SystemInfo:
        """OSの静的情報を取得"""
        memory = psutil.virtual_memory()

        return SystemInfo(
            platform=platform.system().lower(),
            arch=platform.machine(),
            python_version=platform.python_version(),
            cpu_count=psutil.cpu_count(logical=True) or 1,
            total_memory=memory.total,
            free_memory=memory.available,
            load_average=self._get_load_average()
        )

    @staticmethod
    def _get_load_average() -> Tuple[float, float, float]:
        try:
            return tuple(psutil.getloadavg())
        except (AttributeError, OSError) as e:
            logger.debug(f"Load average unavailable: {e}")
            return (0.0, 0.0, 0.0)

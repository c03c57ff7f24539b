"""
MCP Observability - 例外クラス定義
監視サブシステムで使用する例外クラス群
"""

from typing import Optional


class ObservabilityError(Exception):
    """MCP Observability基底例外クラス"""
    
    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(self.message)
    
    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigurationError(ObservabilityError):
    """設定ファイル関連エラー"""
    pass


class HealthCheckTimeoutError(ObservabilityError):
    """ヘルスチェックが制限時間内に完了しなかった場合のエラー"""
    
    def __init__(self, check_name: str, timeout_seconds: float):
        self.check_name = check_name
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Check timed out after {timeout_seconds}s",
            details=check_name
        )

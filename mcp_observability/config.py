"""
MCP Observability - Configuration
監視設定のデータモデルと読み込み
"""

import logging
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .exceptions import ConfigurationError
from .health.checks.dependency_check import DEFAULT_ENDPOINT, DEFAULT_USER_AGENT
from .monitoring.histogram import DEFAULT_CAPACITY

logger = logging.getLogger(__name__)


class MonitoringSettings(BaseModel):
    """監視設定のデータモデル"""

    slow_operation_threshold_ms: float = Field(default=1000.0, description="低速処理とみなす所要時間（ミリ秒）")
    histogram_capacity: int = Field(default=DEFAULT_CAPACITY, description="ヒストグラムの標本数上限")
    probe_timeout_seconds: float = Field(default=10.0, description="ヘルスチェック1件の制限時間（秒）")
    memory_warning_threshold: float = Field(default=0.8, description="DEGRADEDとするメモリ使用率")
    memory_critical_threshold: float = Field(default=0.9, description="UNHEALTHYとするメモリ使用率")
    enable_dependency_check: bool = Field(default=True, description="外部依存先チェックを登録するか")
    dependency_name: str = Field(default="nws-api", description="外部依存先チェック名")
    dependency_url: str = Field(default=DEFAULT_ENDPOINT, description="外部依存先の疎通確認URL")
    dependency_timeout_seconds: float = Field(default=5.0, description="外部依存先リクエストのタイムアウト（秒）")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="外部依存先に送るUser-Agent")

    @field_validator('slow_operation_threshold_ms', 'probe_timeout_seconds', 'dependency_timeout_seconds')
    @classmethod
    def validate_positive(cls, v):
        """正の値のバリデーション"""
        if v <= 0:
            raise ValueError("Value must be positive")
        return v

    @field_validator('histogram_capacity')
    @classmethod
    def validate_capacity(cls, v):
        """標本数上限のバリデーション"""
        if v <= 0:
            raise ValueError("Histogram capacity must be positive")
        return v

    @field_validator('memory_warning_threshold', 'memory_critical_threshold')
    @classmethod
    def validate_ratio(cls, v):
        """使用率のバリデーション"""
        if not 0 < v <= 1:
            raise ValueError("Memory threshold must be in (0, 1]")
        return v

    @field_validator('dependency_url')
    @classmethod
    def validate_url(cls, v):
        """URLのバリデーション"""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Dependency URL must start with http:// or https://")
        return v

    @model_validator(mode='after')
    def validate_thresholds(self):
        """閾値の大小関係のバリデーション"""
        if self.memory_warning_threshold > self.memory_critical_threshold:
            raise ValueError("Memory warning threshold cannot exceed critical threshold")
        return self


def load_settings(config_path: Optional[Union[str, Path]] = None) -> MonitoringSettings:
    """
    設定ファイルの読み込み

    Args:
        config_path: YAMLまたはJSONの設定ファイルパス。Noneの場合はデフォルト設定

    Returns:
        読み込まれた設定

    Raises:
        ConfigurationError: 設定ファイルの読み込みまたはバリデーションに失敗した場合
    """
    if config_path is None:
        return MonitoringSettings()

    path = Path(config_path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Failed to read config file: {path}", str(e))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid config file format: {path}", str(e))

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {path}")

    try:
        settings = MonitoringSettings(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid monitoring settings: {path}", str(e))

    logger.info(f"Monitoring settings loaded: {path}")
    return settings

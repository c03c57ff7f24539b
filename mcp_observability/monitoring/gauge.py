"""
MCP Observability - Gauge
現在値を表すゲージ
"""

from datetime import datetime
from typing import Dict, List, Union

from .labels import Labels, labels_to_key, key_to_labels
from .types import MetricValue

Number = Union[int, float]


class Gauge:
    """増減するゲージ
    
    処理中リクエスト数のような現在の状態を表すため、
    レジストリ全体のリセット対象にはならない。
    """
    
    def __init__(self, name: str):
        self.name = name
        self._values: Dict[str, Number] = {}
    
    def set(self, value: Number, labels: Labels = None) -> None:
        """値を設定"""
        self._values[labels_to_key(labels)] = value
    
    def increment(self, labels: Labels = None) -> None:
        """1加算"""
        key = labels_to_key(labels)
        self._values[key] = self._values.get(key, 0) + 1
    
    def decrement(self, labels: Labels = None) -> None:
        """1減算"""
        key = labels_to_key(labels)
        self._values[key] = self._values.get(key, 0) - 1
    
    def get(self) -> Number:
        return self._values.get("", 0)
    
    def get_with_labels(self, labels: Labels) -> Number:
        return self._values.get(labels_to_key(labels), 0)
    
    def get_all_values(self) -> List[MetricValue]:
        timestamp = datetime.now().isoformat()
        return [
            MetricValue(value=value, timestamp=timestamp, labels=key_to_labels(key) or None)
            for key, value in self._values.items()
        ]

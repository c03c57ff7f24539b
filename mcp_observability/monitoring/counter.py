"""
MCP Observability - Counter
ラベル別の累積カウンター
"""

from datetime import datetime
from typing import Dict, List

from .labels import Labels, labels_to_key, key_to_labels
from .types import MetricValue


class Counter:
    """単調増加カウンター"""
    
    def __init__(self, name: str):
        self.name = name
        self._values: Dict[str, int] = {}
    
    def increment(self, labels: Labels = None) -> None:
        """ラベルの組み合わせごとに1加算"""
        key = labels_to_key(labels)
        self._values[key] = self._values.get(key, 0) + 1
    
    def get(self) -> int:
        """ラベルなしの値を取得"""
        return self._values.get("", 0)
    
    def get_with_labels(self, labels: Labels) -> int:
        """指定ラベルの値を取得（未記録なら0）"""
        return self._values.get(labels_to_key(labels), 0)
    
    def get_all_values(self) -> List[MetricValue]:
        """記録済みの全ラベルの値を取得"""
        timestamp = datetime.now().isoformat()
        return [
            MetricValue(value=value, timestamp=timestamp, labels=key_to_labels(key) or None)
            for key, value in self._values.items()
        ]
    
    def reset(self) -> None:
        """全ラベルの値を0に戻す（ラベル自体は残す）"""
        for key in self._values:
            self._values[key] = 0
